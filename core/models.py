"""
HSK Study – Data model
=======================
Vocabulary and sentence records, the per-level catalog, and the value
objects the study session is built from.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Union

from core.shuffle import shuffle_in_place

LEVELS: Tuple[int, ...] = (1, 2, 3)


def check_level(level: int) -> int:
    """Return *level* unchanged, or raise ``ValueError`` if it is not a tier."""
    if level not in LEVELS:
        raise ValueError(f"level must be one of {LEVELS}, got {level!r}")
    return level


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VocabularyItem:
    character: str
    pronunciation: str
    meaning: str


@dataclass(frozen=True)
class SentenceItem:
    source: str
    translation: str


StudyItem = Union[VocabularyItem, SentenceItem]


@dataclass
class Catalog:
    """Everything loaded at startup, keyed by level."""

    vocabulary: Dict[int, List[VocabularyItem]] = field(default_factory=dict)
    sentences: Dict[int, List[SentenceItem]] = field(default_factory=dict)
    sentences_available: bool = True

    def words(self, level: int) -> List[VocabularyItem]:
        return self.vocabulary.get(check_level(level), [])

    def sentences_for(self, level: int) -> List[SentenceItem]:
        return self.sentences.get(check_level(level), [])

    def word_count(self, level: int) -> int:
        return len(self.words(level))

    def reshuffle_sentences(self, level: int, rng: random.Random) -> None:
        """Permute one level's sentence order in place.

        This is the only mutation the catalog allows after loading.
        """
        shuffle_in_place(self.sentences.setdefault(check_level(level), []), rng)


# ---------------------------------------------------------------------------
# Session values
# ---------------------------------------------------------------------------
class Mode(Enum):
    MENU = "menu"
    FLASHCARD = "flashcard"
    QUIZ = "quiz"
    RESULTS = "results"
    READING = "reading"


@dataclass(frozen=True)
class QuizAttempt:
    """One answered quiz prompt."""
    prompt: VocabularyItem
    chosen: VocabularyItem
    was_correct: bool


@dataclass(frozen=True)
class QuizResult:
    correct: int
    total: int
    percentage: int
    band: str                          # excellent / good / encouragement
    incorrect: Tuple[QuizAttempt, ...] = ()


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the study session.

    Replaced wholesale on every transition; nothing outside
    ``StudySession`` builds or edits one.
    """
    level: int = LEVELS[0]
    mode: Mode = Mode.MENU
    working_set: Tuple[StudyItem, ...] = ()
    position: int = 0
    answer_revealed: bool = False
    quiz_log: Tuple[QuizAttempt, ...] = ()
    correct_count: int = 0
    options: Tuple[VocabularyItem, ...] = ()   # current quiz prompt only
