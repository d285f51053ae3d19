"""Random picks used when choosing product variants."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")

_RNG = random.Random()


def random_index(length: int, rng: random.Random | None = None) -> int:
    if length <= 0:
        return 0
    return (rng or _RNG).randrange(length)


def random_element(items: Sequence[T] | None, rng: random.Random | None = None) -> T | None:
    """Return a random element of *items*, or ``None`` when there is nothing to pick."""

    if not items:
        return None
    return items[random_index(len(items), rng)]


def random_number(low: int, high: int, rng: random.Random | None = None) -> int:
    """Return a random integer between *low* and *high*, both inclusive."""

    if high < low:
        low, high = high, low
    return (rng or _RNG).randint(low, high)


__all__ = ["random_element", "random_index", "random_number"]
