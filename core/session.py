"""
HSK Study – Study session controller
=====================================
State machine behind the menu, flashcard, quiz, results and reading
screens. The UI calls the named actions below and renders whatever
``state`` and the derived properties say; it never edits state itself.

Transitions
-----------
menu       select_level · start_flashcards · start_quiz · start_reading
flashcard  reveal · next · previous · shuffle · back
quiz       answer · back
results    retry · back
reading    reveal · next · previous · shuffle · back
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, Tuple

from core.errors import InvalidTransition, SpeechUnsupported
from core.models import (
    LEVELS,
    Catalog,
    Mode,
    QuizAttempt,
    QuizResult,
    SessionState,
    StudyItem,
    VocabularyItem,
    check_level,
)
from core.quiz import build_options, is_correct, summarize
from core.shuffle import shuffled

log = logging.getLogger(__name__)


class StudySession:
    """Owns the ``SessionState`` and every transition on it."""

    def __init__(self, catalog: Catalog, *, rng: random.Random | None = None, speaker=None) -> None:
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._speaker = speaker
        self._state = SessionState()
        self._state = replace(self._state, working_set=self._shuffled_words())

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def current_item(self) -> StudyItem | None:
        s = self._state
        if 0 <= s.position < len(s.working_set):
            return s.working_set[s.position]
        return None

    @property
    def is_last(self) -> bool:
        return self._state.position >= len(self._state.working_set) - 1

    @property
    def progress(self) -> Tuple[int, int]:
        """(1-based position, total) for the "3 / 20" counters."""
        return self._state.position + 1, len(self._state.working_set)

    @property
    def is_reading_empty(self) -> bool:
        """Reading mode with nothing to read – only ``back()`` is valid."""
        return self._state.mode is Mode.READING and not self._state.working_set

    @property
    def quiz_score(self) -> Tuple[int, int]:
        """(correct so far, answered so far)."""
        return self._state.correct_count, len(self._state.quiz_log)

    def level_word_counts(self) -> Dict[int, int]:
        return {level: self._catalog.word_count(level) for level in LEVELS}

    def result(self) -> QuizResult:
        self._require(Mode.RESULTS, action="show results")
        return summarize(self._state.quiz_log, len(self._state.working_set))

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------

    def select_level(self, level: int) -> None:
        self._require(Mode.MENU, action="select a level")
        check_level(level)
        self._state = replace(self._state, level=level)
        self._state = replace(self._state, working_set=self._shuffled_words(), position=0)
        log.info("Selected level %d (%d words)", level, len(self._state.working_set))

    def start_flashcards(self) -> bool:
        """Enter flashcard mode; returns False if the level has no words."""
        self._require(Mode.MENU, action="start flashcards")
        words = self._shuffled_words()
        if not words:
            log.warning("Level %d has no vocabulary", self.level)
            return False
        self._enter(Mode.FLASHCARD, words)
        return True

    def start_quiz(self) -> bool:
        """Enter quiz mode with a fresh log; returns False if the level has no words."""
        self._require(Mode.MENU, Mode.RESULTS, action="start a quiz")
        words = self._shuffled_words()
        if not words:
            log.warning("Level %d has no vocabulary", self.level)
            return False
        self._enter(Mode.QUIZ, words)
        self._state = replace(self._state, options=self._options_for(words[0]))
        return True

    def start_reading(self) -> None:
        self._require(Mode.MENU, action="start reading")
        sentences = shuffled(self._catalog.sentences_for(self.level), self._rng)
        self._enter(Mode.READING, sentences)

    # ------------------------------------------------------------------
    # Card navigation (flashcard + reading)
    # ------------------------------------------------------------------

    def reveal(self) -> None:
        self._require_card("reveal")
        if self._state.answer_revealed:
            return
        self._state = replace(self._state, answer_revealed=True)

    def next(self) -> None:
        """Advance one card; past the last card the session returns to the menu."""
        self._require_card("go to the next card")
        if self.is_last:
            self._to_menu()
            return
        self._state = replace(
            self._state, position=self._state.position + 1, answer_revealed=False,
        )

    def previous(self) -> None:
        self._require_card("go to the previous card")
        if self._state.position == 0:
            return
        self._state = replace(
            self._state, position=self._state.position - 1, answer_revealed=False,
        )

    def shuffle(self) -> None:
        self._require_card("shuffle")
        if self.mode is Mode.FLASHCARD:
            items = shuffled(self._state.working_set, self._rng)
        else:
            # Reading reorders the catalog's sentences for this level.
            self._catalog.reshuffle_sentences(self.level, self._rng)
            items = list(self._catalog.sentences_for(self.level))
        self._state = replace(
            self._state, working_set=tuple(items), position=0, answer_revealed=False,
        )

    # ------------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------------

    def answer(self, choice: VocabularyItem) -> bool:
        """Record *choice* for the current prompt; returns whether it was right."""
        self._require(Mode.QUIZ, action="answer")
        s = self._state
        if s.position >= len(s.working_set):
            raise InvalidTransition("answer", s.mode)

        prompt = s.working_set[s.position]
        correct = is_correct(prompt, choice)
        attempt = QuizAttempt(prompt=prompt, chosen=choice, was_correct=correct)
        log.debug("Quiz %d/%d: %r -> %r (%s)", s.position + 1, len(s.working_set),
                  prompt.character, choice.meaning, "ok" if correct else "wrong")

        quiz_log = s.quiz_log + (attempt,)
        correct_count = s.correct_count + (1 if correct else 0)

        if self.is_last:
            self._state = replace(
                s, mode=Mode.RESULTS, quiz_log=quiz_log,
                correct_count=correct_count, options=(),
            )
            log.info("Quiz finished: %d/%d", correct_count, len(s.working_set))
        else:
            position = s.position + 1
            self._state = replace(
                s, position=position, quiz_log=quiz_log, correct_count=correct_count,
                options=self._options_for(s.working_set[position]),
            )
        return correct

    def retry(self) -> bool:
        self._require(Mode.RESULTS, action="retry")
        return self.start_quiz()

    # ------------------------------------------------------------------
    # Leaving a mode
    # ------------------------------------------------------------------

    def back(self) -> None:
        self._require(
            Mode.FLASHCARD, Mode.QUIZ, Mode.RESULTS, Mode.READING, action="go back",
        )
        self._to_menu()

    # ------------------------------------------------------------------
    # Speech
    # ------------------------------------------------------------------

    def speak_current(self) -> None:
        """Read the current character or sentence aloud.

        Raises ``SpeechUnsupported`` if no working speaker is configured.
        """
        if self._speaker is None:
            raise SpeechUnsupported("Text-to-speech is not available.")
        item = self.current_item
        if item is None or self.mode not in (Mode.FLASHCARD, Mode.READING):
            return
        text = item.character if isinstance(item, VocabularyItem) else item.source
        self._speaker.speak(text)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, *modes: Mode, action: str) -> None:
        if self._state.mode not in modes:
            raise InvalidTransition(action, self._state.mode)

    def _require_card(self, action: str) -> None:
        """Flashcard or reading mode with at least one card to act on."""
        self._require(Mode.FLASHCARD, Mode.READING, action=action)
        if not self._state.working_set:
            raise InvalidTransition(action, self._state.mode)

    def _shuffled_words(self) -> Tuple[VocabularyItem, ...]:
        return tuple(shuffled(self._catalog.words(self.level), self._rng))

    def _options_for(self, prompt: VocabularyItem) -> Tuple[VocabularyItem, ...]:
        return tuple(build_options(prompt, self._catalog.words(self.level), self._rng))

    def _enter(self, mode: Mode, items) -> None:
        self._state = SessionState(level=self.level, mode=mode, working_set=tuple(items))
        log.info("Entered %s mode at level %d (%d items)", mode.value, self.level, len(items))

    def _to_menu(self) -> None:
        # Quiz attempts do not survive a return to the menu.
        if self._speaker is not None:
            self._speaker.cancel()
        self._state = SessionState(level=self.level, working_set=self._shuffled_words())
        log.info("Back to menu")
