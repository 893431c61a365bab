"""
HSK Study – Quiz and results screens
=====================================
Multiple choice: pick the meaning of the character shown. The results
screen lists every miss for review and offers a retry.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from core.session import StudySession
from ui.widgets import (
    AccentButton,
    CardFrame,
    GhostButton,
    StatCard,
    Theme,
    font,
    hanzi_font,
    header_bar,
)

BAND_BADGES = {
    "excellent": ("🎉", "Excellent work!"),
    "good": ("👍", "Good job!"),
    "encouragement": ("💪", "Keep practising!"),
}


class QuizView(ctk.CTkFrame):
    """Current prompt and its answer options."""

    def __init__(self, master, session: StudySession, act: Callable, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        bar = header_bar(self, f"HSK {session.level} Quiz",
                         on_back=lambda: act(session.back), back_text="←  Exit Quiz")
        correct, answered = session.quiz_score
        ctk.CTkLabel(bar, text=f"Score: {correct}/{answered}", font=font(15, "bold"),
                     text_color=Theme.QUIZ).grid(row=0, column=2, sticky="e")

        word = session.current_item
        card = CardFrame(self)
        card.pack(padx=60, pady=(24, 12), fill="both", expand=True)

        ctk.CTkLabel(card, text=word.character, font=hanzi_font(64),
                     text_color=Theme.TEXT_PRIMARY).pack(pady=(32, 0))
        ctk.CTkLabel(card, text=word.pronunciation, font=font(22),
                     text_color=Theme.TEXT_SECONDARY).pack(pady=(4, 12))
        ctk.CTkLabel(card, text="Select the correct meaning:", font=font(15),
                     text_color=Theme.TEXT_MUTED).pack(pady=(0, 16))

        grid = ctk.CTkFrame(card, fg_color="transparent")
        grid.pack(fill="x", padx=32, pady=(0, 32))
        grid.grid_columnconfigure((0, 1), weight=1)
        for idx, option in enumerate(session.state.options):
            AccentButton(
                grid, text=f"{idx + 1}.  {option.meaning}", color=Theme.QUIZ, height=56,
                command=lambda o=option: act(session.answer, o),
            ).grid(row=idx // 2, column=idx % 2, padx=6, pady=6, sticky="ew")

        pos, total = session.progress
        ctk.CTkLabel(self, text=f"Question {pos} / {total}", font=font(14, "bold"),
                     text_color=Theme.TEXT_SECONDARY).pack(pady=(0, 24))


class ResultsView(ctk.CTkFrame):
    """Score summary with a review list of incorrect answers."""

    def __init__(self, master, session: StudySession, act: Callable, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        result = session.result()
        emoji, headline = BAND_BADGES[result.band]

        top = ctk.CTkFrame(self, fg_color="transparent")
        top.pack(fill="x", padx=40, pady=(28, 0))
        ctk.CTkLabel(top, text=emoji, font=font(48)).pack()
        ctk.CTkLabel(top, text=f"Quiz Complete!  {headline}", font=font(26, "bold"),
                     text_color=Theme.TEXT_PRIMARY).pack(pady=(4, 16))

        stats = ctk.CTkFrame(top, fg_color="transparent")
        stats.pack(fill="x")
        for label, value, color in [
            ("Score", f"{result.correct} / {result.total}", Theme.ACCENT),
            ("Correct", f"{result.percentage}%", Theme.SUCCESS),
            ("Missed", str(len(result.incorrect)), Theme.DANGER),
        ]:
            StatCard(stats, label=label, value=value, color=color).pack(
                side="left", padx=(0, 12), fill="x", expand=True)

        if result.incorrect:
            ctk.CTkLabel(self, text="Review incorrect answers", font=font(16, "bold"),
                         text_color=Theme.TEXT_PRIMARY).pack(anchor="w", padx=40, pady=(20, 6))
            scroll = ctk.CTkScrollableFrame(
                self, fg_color="transparent",
                scrollbar_button_color=Theme.BORDER,
                scrollbar_button_hover_color=Theme.ACCENT,
            )
            scroll.pack(fill="both", expand=True, padx=36)
            for attempt in result.incorrect:
                row = ctk.CTkFrame(scroll, fg_color=Theme.BG_CARD, corner_radius=10,
                                   border_width=1, border_color=Theme.DANGER)
                row.pack(fill="x", pady=4)
                ctk.CTkLabel(
                    row, text=f"{attempt.prompt.character}  ({attempt.prompt.pronunciation})",
                    font=hanzi_font(22), text_color=Theme.TEXT_PRIMARY,
                ).pack(anchor="w", padx=16, pady=(10, 2))
                ctk.CTkLabel(row, text=f"✓ Correct: {attempt.prompt.meaning}", font=font(13),
                             text_color=Theme.SUCCESS).pack(anchor="w", padx=16)
                ctk.CTkLabel(row, text=f"✗ Your answer: {attempt.chosen.meaning}", font=font(13),
                             text_color=Theme.DANGER).pack(anchor="w", padx=16, pady=(0, 10))
        else:
            ctk.CTkFrame(self, fg_color="transparent").pack(fill="both", expand=True)

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.pack(pady=20)
        AccentButton(buttons, text="Try Again", color=Theme.QUIZ, width=160,
                     command=lambda: act(session.retry)).pack(side="left", padx=8)
        GhostButton(buttons, text="Back to Menu", width=160, height=44,
                    command=lambda: act(session.back)).pack(side="left", padx=8)
