"""
HSK Study – Shuffling
======================
Uniform random permutations for working sets and quiz options.
"""

from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def shuffle_in_place(items: List[T], rng: random.Random) -> None:
    """Fisher–Yates: walk from the last index down to 1, swapping each slot
    with a uniformly chosen slot at or below it."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def shuffled(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy of *items*; the source is left untouched."""
    copy = list(items)
    shuffle_in_place(copy, rng)
    return copy
