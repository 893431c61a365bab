"""
HSK Study – Flashcard screen
=============================
Character and pinyin up front; the meaning appears on reveal.
Previous / next walk the shuffled deck, finishing back at the menu.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from core.session import StudySession
from ui.widgets import AccentButton, CardFrame, GhostButton, Theme, font, hanzi_font, header_bar


class FlashcardView(ctk.CTkFrame):
    """Renders the current flashcard of a ``StudySession``."""

    def __init__(self, master, session: StudySession, act: Callable,
                 speak: Callable[[], None] | None = None, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)
        self._session = session
        self._act = act

        bar = header_bar(self, f"HSK {session.level} Flashcards",
                         on_back=lambda: act(session.back))
        GhostButton(bar, text="🔀  Shuffle", width=110,
                    command=lambda: act(session.shuffle)).grid(row=0, column=2, sticky="e")

        word = session.current_item
        state = session.state

        # ── Card ──
        card = CardFrame(self)
        card.pack(padx=60, pady=(24, 16), fill="both", expand=True)
        card.bind("<Button-1>", lambda _: act(session.reveal))

        if speak is not None:
            GhostButton(card, text="🔊", width=44, height=44, corner_radius=22,
                        font=font(18), command=speak).pack(anchor="ne", padx=16, pady=(16, 0))

        ctk.CTkLabel(card, text=word.character, font=hanzi_font(72),
                     text_color=Theme.TEXT_PRIMARY).pack(expand=True, pady=(10, 0))
        ctk.CTkLabel(card, text=word.pronunciation, font=font(24),
                     text_color=Theme.TEXT_SECONDARY).pack(pady=(0, 16))

        if state.answer_revealed:
            ctk.CTkLabel(card, text=word.meaning or "—", font=font(28, "bold"),
                         text_color=Theme.SUCCESS, wraplength=560).pack(pady=(0, 36))
        else:
            AccentButton(card, text="Show Meaning", width=180,
                         command=lambda: act(session.reveal)).pack(pady=(0, 36))

        # ── Navigation ──
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
                     color=Theme.FLASHCARD, width=130,
                     command=lambda: act(session.next)).grid(row=0, column=2)
