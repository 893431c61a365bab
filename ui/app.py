"""
HSK Study – Main application window
====================================
Loads the catalog in the background, then swaps one screen in and out
of the window according to the study session's mode.
"""

from __future__ import annotations

import logging
import threading
from tkinter import messagebox
from typing import Callable

import customtkinter as ctk

from core.errors import DataLoadFailure, InvalidTransition, SpeechUnsupported
from core.loader import DataLoader
from core.models import Catalog, Mode
from core.session import StudySession
from core.speech import Speaker
from ui.flashcard_view import FlashcardView
from ui.menu_view import MenuView
from ui.quiz_view import QuizView, ResultsView
from ui.reading_view import ReadingView
from ui.status_views import LoadErrorView, LoadingView
from ui.widgets import Theme

log = logging.getLogger(__name__)


class HSKStudyApp(ctk.CTk):
    """Root application window."""

    APP_TITLE = "HSK Study — Chinese Vocabulary Trainer"
    WIDTH = 1000
    HEIGHT = 720

    def __init__(self, loader: DataLoader | None = None, speaker: Speaker | None = None) -> None:
        super().__init__()

        # ── Window setup ──
        self.title(self.APP_TITLE)
        self.geometry(f"{self.WIDTH}x{self.HEIGHT}")
        self.minsize(820, 600)
        self.configure(fg_color=Theme.BG_DARK)

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._loader = loader or DataLoader()
        self._speaker = speaker or Speaker()
        self._session: StudySession | None = None
        self._view: ctk.CTkFrame | None = None

        self.bind("<KeyPress>", self._on_key)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._start_loading()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _start_loading(self) -> None:
        """Throw away any session and read the data files from scratch."""
        self._session = None
        self._show(LoadingView(self))
        threading.Thread(target=self._load_in_background, daemon=True).start()

    def _load_in_background(self) -> None:
        try:
            catalog = self._loader.restart()
        except DataLoadFailure as exc:
            self.after(0, self._show_failure, str(exc))
        except Exception as exc:
            log.exception("Unexpected error while loading data")
            self.after(0, self._show_failure, f"Unexpected error: {exc}")
        else:
            self.after(0, self._on_loaded, catalog)

    def _on_loaded(self, catalog: Catalog) -> None:
        self._session = StudySession(catalog, speaker=self._speaker)
        self._render()

    def _show_failure(self, message: str) -> None:
        self._show(LoadErrorView(self, message=message, on_retry=self._start_loading))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _show(self, view: ctk.CTkFrame) -> None:
        if self._view is not None:
            self._view.destroy()
        self._view = view
        view.grid(row=0, column=0, sticky="nsew")

    def _render(self) -> None:
        session = self._session
        mode = session.mode
        if mode is Mode.MENU:
            view = MenuView(self, session, self._act)
        elif mode is Mode.FLASHCARD:
            view = FlashcardView(self, session, self._act, speak=self._speak)
        elif mode is Mode.QUIZ:
            view = QuizView(self, session, self._act)
        elif mode is Mode.RESULTS:
            view = ResultsView(self, session, self._act)
        else:
            view = ReadingView(self, session, self._act, speak=self._speak)
        self._show(view)

    def _act(self, action: Callable, *args) -> None:
        """Run one session action, then redraw."""
        try:
            action(*args)
        except InvalidTransition as exc:
            log.debug("Ignored: %s", exc)
            return
        self._render()

    def _speak(self) -> None:
        try:
            self._session.speak_current()
        except SpeechUnsupported as exc:
            messagebox.showwarning("Text-to-speech", f"Sorry, speech is not available.\n\n{exc}",
                                   parent=self)

    def _on_close(self) -> None:
        self._speaker.cancel()
        self.destroy()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def _on_key(self, event) -> None:
        session = self._session
        if session is None:
            return
        key = event.keysym
        mode = session.mode

        if mode in (Mode.FLASHCARD, Mode.READING):
            actions = {
                "space": session.reveal,
                "Right": session.next,
                "Left": session.previous,
                "Escape": session.back,
            }
            if key in actions:
                self._act(actions[key])
        elif mode is Mode.QUIZ:
            if key == "Escape":
                self._act(session.back)
            elif key in ("1", "2", "3", "4"):
                options = session.state.options
                idx = int(key) - 1
                if idx < len(options):
                    self._act(session.answer, options[idx])
        elif mode is Mode.RESULTS and key == "Escape":
            self._act(session.back)
