"""
HSK Study – Menu screen
========================
Level picker plus the three entry points: flashcards, quiz, reading.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from core.models import LEVELS
from core.session import StudySession
from ui.widgets import AccentButton, LevelButton, Separator, Theme, font


class MenuView(ctk.CTkFrame):
    """Home screen; every button maps to one ``StudySession`` action."""

    def __init__(self, master, session: StudySession, act: Callable, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)
        self._session = session
        self._act = act

        wrap = ctk.CTkFrame(self, fg_color="transparent")
        wrap.pack(expand=True, fill="x", padx=60)

        ctk.CTkLabel(
            wrap, text="HSK Study", font=font(40, "bold"), text_color=Theme.TEXT_PRIMARY,
        ).pack(pady=(0, 6))
        ctk.CTkLabel(
            wrap, text="Master Chinese vocabulary for HSK 1-3",
            font=font(16), text_color=Theme.TEXT_SECONDARY,
        ).pack(pady=(0, 28))

        # ── Level picker ──
        ctk.CTkLabel(
            wrap, text="Select HSK level", font=font(15, "bold"), text_color=Theme.TEXT_PRIMARY,
        ).pack(anchor="w", pady=(0, 10))

        levels = ctk.CTkFrame(wrap, fg_color="transparent")
        levels.pack(fill="x")
        counts = session.level_word_counts()
        for col, level in enumerate(LEVELS):
            levels.grid_columnconfigure(col, weight=1)
            LevelButton(
                levels, level=level, words=counts[level],
                selected=level == session.level,
                command=lambda lv=level: self._act(self._session.select_level, lv),
            ).grid(row=0, column=col, padx=6, sticky="ew")

        Separator(wrap).pack(fill="x", pady=24)

        # ── Modes ──
        modes = ctk.CTkFrame(wrap, fg_color="transparent")
        modes.pack(fill="x")
        has_words = counts[session.level] > 0
        for col, (text, color, action) in enumerate([
            ("📖  Flashcards", Theme.FLASHCARD, session.start_flashcards),
            ("🏆  Quiz", Theme.QUIZ, session.start_quiz),
            ("📚  Reading Practice", Theme.READING, session.start_reading),
        ]):
            modes.grid_columnconfigure(col, weight=1)
            AccentButton(
                modes, text=text, color=color, height=64,
                state="normal" if has_words or action == session.start_reading else "disabled",
                command=lambda a=action: self._act(a),
            ).grid(row=0, column=col, padx=6, sticky="ew")

        hint = "Choose a level and mode to start learning!"
        if not session.catalog.sentences_available:
            hint += "\nReading sentences could not be loaded – reading practice is empty."
        ctk.CTkLabel(
            wrap, text=hint, font=font(13), text_color=Theme.TEXT_MUTED, justify="center",
        ).pack(pady=(24, 0))
