"""
HSK Study – Quiz helpers
=========================
Multiple-choice option generation and result scoring.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Sequence

from core.models import QuizAttempt, QuizResult, VocabularyItem
from core.shuffle import shuffle_in_place

log = logging.getLogger(__name__)

OPTION_COUNT = 4
MAX_OPTION_DRAWS = 200

EXCELLENT_AT = 80
GOOD_AT = 60


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def build_options(
    correct: VocabularyItem,
    vocabulary: Sequence[VocabularyItem],
    rng: random.Random,
) -> List[VocabularyItem]:
    """Return the answer choices for *correct*, in random order.

    Distractors are drawn uniformly from the whole level *vocabulary*; a
    draw is kept only if its meaning is not already among the options. No
    two options ever share a meaning, so a level with fewer than
    ``OPTION_COUNT`` distinct meanings gets fewer options.

    Random drawing stops after ``MAX_OPTION_DRAWS`` attempts; any slots
    still open are then filled by scanning *vocabulary* in order.
    """
    distinct = {item.meaning for item in vocabulary} | {correct.meaning}
    target = min(OPTION_COUNT, len(distinct))

    options = [correct]
    seen = {correct.meaning}
    draws = 0
    while len(options) < target and draws < MAX_OPTION_DRAWS:
        draws += 1
        candidate = vocabulary[rng.randrange(len(vocabulary))]
        if candidate.meaning not in seen:
            options.append(candidate)
            seen.add(candidate.meaning)

    if len(options) < target:
        log.debug("Option draw cap hit for %r; filling by scan", correct.meaning)
        for candidate in vocabulary:
            if len(options) >= target:
                break
            if candidate.meaning not in seen:
                options.append(candidate)
                seen.add(candidate.meaning)

    shuffle_in_place(options, rng)
    return options


def is_correct(prompt: VocabularyItem, chosen: VocabularyItem) -> bool:
    return chosen.meaning == prompt.meaning


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def percentage(correct: int, total: int) -> int:
    """Whole-number percentage, halves rounded up."""
    if total <= 0:
        return 0
    return math.floor(100 * correct / total + 0.5)


def band_for(pct: int) -> str:
    if pct >= EXCELLENT_AT:
        return "excellent"
    if pct >= GOOD_AT:
        return "good"
    return "encouragement"


def summarize(quiz_log: Sequence[QuizAttempt], total: int) -> QuizResult:
    """Score a finished quiz of *total* prompts."""
    correct = sum(1 for attempt in quiz_log if attempt.was_correct)
    pct = percentage(correct, total)
    return QuizResult(
        correct=correct,
        total=total,
        percentage=pct,
        band=band_for(pct),
        incorrect=tuple(a for a in quiz_log if not a.was_correct),
    )
