"""
HSK Study – Loading and load-failure screens
=============================================
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from ui.widgets import CardFrame, DangerButton, Theme, font


class LoadingView(ctk.CTkFrame):
    """Shown while the data files are being read."""

    def __init__(self, master, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        wrap = ctk.CTkFrame(self, fg_color="transparent")
        wrap.pack(expand=True)
        ctk.CTkLabel(wrap, text="⏳  Loading HSK vocabulary…", font=font(22, "bold"),
                     text_color=Theme.ACCENT).pack(pady=(0, 16))
        self._pbar = ctk.CTkProgressBar(
            wrap, fg_color=Theme.BG_CARD, progress_color=Theme.ACCENT,
            width=360, height=8, corner_radius=4, mode="indeterminate",
        )
        self._pbar.pack()
        self._pbar.start()

    def destroy(self):
        self._pbar.stop()
        super().destroy()


class LoadErrorView(ctk.CTkFrame):
    """Fatal load failure: the message and a single Retry action."""

    def __init__(self, master, message: str, on_retry: Callable[[], None], **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        card = CardFrame(self, border_color=Theme.DANGER)
        card.pack(expand=True, padx=120, fill="x")
        ctk.CTkLabel(card, text="Error Loading Data", font=font(24, "bold"),
                     text_color=Theme.DANGER).pack(pady=(32, 12))
        ctk.CTkLabel(card, text=message, font=font(14), text_color=Theme.TEXT_PRIMARY,
                     wraplength=520, justify="center").pack(padx=24)
        ctk.CTkLabel(
            card,
            text="Make sure hsk1.json, hsk2.json and hsk3.json are in the data folder.",
            font=font(12), text_color=Theme.TEXT_MUTED, wraplength=520,
        ).pack(padx=24, pady=(12, 20))
        DangerButton(card, text="Retry", width=140, command=on_retry).pack(pady=(0, 32))
