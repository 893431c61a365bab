"""
HSK Study – Reading practice screen
====================================
One example sentence at a time; the translation appears on reveal.
Levels without sentences get a "no content" panel instead.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from core.session import StudySession
from ui.widgets import AccentButton, CardFrame, GhostButton, Theme, font, hanzi_font, header_bar


class ReadingView(ctk.CTkFrame):

    def __init__(self, master, session: StudySession, act: Callable,
                 speak: Callable[[], None] | None = None, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        if session.is_reading_empty:
            self._build_empty(session, act)
            return

        bar = header_bar(self, f"HSK {session.level} Reading Practice",
                         on_back=lambda: act(session.back))
        GhostButton(bar, text="🔀  Shuffle", width=110,
                    command=lambda: act(session.shuffle)).grid(row=0, column=2, sticky="e")

        sentence = session.current_item
        state = session.state

        card = CardFrame(self)
        card.pack(padx=60, pady=(24, 16), fill="both", expand=True)

        if speak is not None:
            GhostButton(card, text="🔊", width=44, height=44, corner_radius=22,
                        font=font(18), command=speak).pack(anchor="ne", padx=16, pady=(16, 0))

        ctk.CTkLabel(card, text=sentence.source, font=hanzi_font(36),
                     text_color=Theme.TEXT_PRIMARY, wraplength=620,
                     justify="center").pack(expand=True, pady=(10, 16))

        if state.answer_revealed:
            ctk.CTkLabel(card, text=sentence.translation or "—", font=font(22, "bold"),
                         text_color=Theme.SUCCESS, wraplength=620,
                         justify="center").pack(pady=(0, 36))
        else:
            AccentButton(card, text="Show Translation", color=Theme.READING, width=200,
                         command=lambda: act(session.reveal)).pack(pady=(0, 36))

        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.pack(fill="x", padx=60, pady=(0, 28))
        nav.grid_columnconfigure(1, weight=1)

        GhostButton(nav, text="←  Previous", width=130, height=44,
                    state="disabled" if state.position == 0 else "normal",
                    command=lambda: act(session.previous)).grid(row=0, column=0)
        pos, total = session.progress
        ctk.CTkLabel(nav, text=f"{pos} / {total}", font=font(15, "bold"),
                     text_color=Theme.TEXT_SECONDARY).grid(row=0, column=1)
        AccentButton(nav, text="Finish  ›" if session.is_last else "Next  ›",
                     color=Theme.READING, width=130,
                     command=lambda: act(session.next)).grid(row=0, column=2)

    def _build_empty(self, session: StudySession, act: Callable) -> None:
        wrap = CardFrame(self)
        wrap.pack(expand=True, padx=80, pady=80, fill="x")
        ctk.CTkLabel(wrap, text="No Sentences Available", font=font(24, "bold"),
                     text_color=Theme.TEXT_PRIMARY).pack(pady=(36, 8))
        ctk.CTkLabel(
            wrap,
            text=f"Reading practice sentences are not available for HSK {session.level} yet.\n"
                 "Add them to core/data/sentences.json to enable this mode.",
            font=font(14), text_color=Theme.TEXT_SECONDARY, justify="center",
        ).pack(pady=(0, 24))
        AccentButton(wrap, text="Back to Menu", width=180,
                     command=lambda: act(session.back)).pack(pady=(0, 36))
