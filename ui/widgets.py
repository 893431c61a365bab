"""
HSK Study – Reusable CustomTkinter widgets
===========================================
Shared UI primitives used by every screen.
"""

from __future__ import annotations

import customtkinter as ctk


# ---------------------------------------------------------------------------
# Colours / design tokens
# ---------------------------------------------------------------------------
class Theme:
    """Centralised colour palette – dark-mode first."""
    BG_DARK        = "#0f1117"
    BG_CARD        = "#1e2030"
    BG_CARD_HOVER  = "#272a3d"
    ACCENT         = "#6366f1"     # indigo
    ACCENT_HOVER   = "#4f46e5"
    FLASHCARD      = "#a855f7"     # per-mode accents
    QUIZ           = "#14b8a6"
    READING        = "#3b82f6"
    SUCCESS        = "#43d9a2"
    DANGER         = "#f55a6a"
    WARNING        = "#f5c842"
    TEXT_PRIMARY   = "#e2e4f0"
    TEXT_SECONDARY = "#8b8fa8"
    TEXT_MUTED     = "#5b5f78"
    BORDER         = "#2a2d40"
    FONT_FAMILY    = "Segoe UI"
    FONT_HANZI     = "Microsoft YaHei"


def font(size: int, weight: str = "normal", family: str = Theme.FONT_FAMILY) -> ctk.CTkFont:
    return ctk.CTkFont(family=family, size=size, weight=weight)


def hanzi_font(size: int) -> ctk.CTkFont:
    return font(size, "bold", Theme.FONT_HANZI)


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------
class AccentButton(ctk.CTkButton):
    """A consistently-styled accent button."""

    def __init__(self, master, text: str = "", command=None, color: str = Theme.ACCENT, **kw):
        kw.setdefault("fg_color", color)
        kw.setdefault("hover_color", Theme.ACCENT_HOVER)
        kw.setdefault("text_color", "#ffffff")
        kw.setdefault("corner_radius", 10)
        kw.setdefault("font", font(15, "bold"))
        kw.setdefault("height", 44)
        super().__init__(master, text=text, command=command, **kw)


class DangerButton(ctk.CTkButton):
    """Red-toned button for the failure screen."""

    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", Theme.DANGER)
        kw.setdefault("hover_color", "#d44454")
        kw.setdefault("text_color", "#ffffff")
        kw.setdefault("corner_radius", 8)
        kw.setdefault("font", font(14, "bold"))
        kw.setdefault("height", 38)
        super().__init__(master, text=text, command=command, **kw)


class GhostButton(ctk.CTkButton):
    """Low-emphasis button (back, shuffle, previous)."""

    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", Theme.BG_CARD)
        kw.setdefault("hover_color", Theme.BG_CARD_HOVER)
        kw.setdefault("text_color", Theme.TEXT_PRIMARY)
        kw.setdefault("text_color_disabled", Theme.TEXT_MUTED)
        kw.setdefault("corner_radius", 8)
        kw.setdefault("font", font(13))
        kw.setdefault("height", 36)
        super().__init__(master, text=text, command=command, **kw)


class LevelButton(ctk.CTkButton):
    """Level picker tile: "HSK 2" over the word count, highlighted when active."""

    def __init__(self, master, level: int, words: int, selected: bool, command=None, **kw):
        kw.setdefault("fg_color", Theme.ACCENT if selected else Theme.BG_CARD)
        kw.setdefault("hover_color", Theme.ACCENT_HOVER if selected else Theme.BG_CARD_HOVER)
        kw.setdefault("text_color", "#ffffff" if selected else Theme.TEXT_PRIMARY)
        kw.setdefault("corner_radius", 12)
        kw.setdefault("font", font(18, "bold"))
        kw.setdefault("height", 84)
        super().__init__(master, text=f"HSK {level}\n{words} words", command=command, **kw)


# ---------------------------------------------------------------------------
# Stat card (results widget)
# ---------------------------------------------------------------------------
class StatCard(ctk.CTkFrame):
    """Small rounded card that shows a label + large number."""

    def __init__(self, master, label: str = "", value: str = "0", color: str = Theme.ACCENT, **kw):
        kw.setdefault("fg_color", Theme.BG_CARD)
        kw.setdefault("corner_radius", 12)
        super().__init__(master, **kw)

        ctk.CTkLabel(
            self, text=label.upper(), font=font(11, "bold"), text_color=Theme.TEXT_MUTED,
        ).pack(padx=16, pady=(14, 0), anchor="w")
        ctk.CTkLabel(
            self, text=value, font=font(28, "bold"), text_color=color,
        ).pack(padx=16, pady=(2, 14), anchor="w")


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------
class Separator(ctk.CTkFrame):
    def __init__(self, master, **kw):
        kw.setdefault("fg_color", Theme.BORDER)
        kw.setdefault("height", 1)
        super().__init__(master, **kw)


class CardFrame(ctk.CTkFrame):
    """The big rounded panel a flashcard, quiz prompt or sentence sits on."""

    def __init__(self, master, **kw):
        kw.setdefault("fg_color", Theme.BG_CARD)
        kw.setdefault("corner_radius", 20)
        kw.setdefault("border_width", 1)
        kw.setdefault("border_color", Theme.BORDER)
        super().__init__(master, **kw)


def header_bar(master, title: str, on_back, back_text: str = "←  Back") -> ctk.CTkFrame:
    """Top row shared by the study screens: back button left, title centre."""
    bar = ctk.CTkFrame(master, fg_color="transparent")
    bar.pack(fill="x", padx=28, pady=(20, 0))
    bar.grid_columnconfigure(1, weight=1)
    GhostButton(bar, text=back_text, command=on_back, width=110).grid(row=0, column=0, sticky="w")
    ctk.CTkLabel(
        bar, text=title, font=font(18, "bold"), text_color=Theme.TEXT_PRIMARY,
    ).grid(row=0, column=1)
    return bar
