"""Adapters that turn random generators into ``RandomSource`` callables."""

from __future__ import annotations

import random
from typing import Optional

from .types import RandomSource


def random_source(rng: Optional[random.Random] = None) -> RandomSource:
    """Wrap ``rng.randrange`` (or the module-level generator) as a source."""

    randrange = rng.randrange if rng is not None else random.randrange

    def draw(low: int, high: int) -> int:
        return randrange(low, high)

    return draw


def seeded_source(seed: int | str | bytes) -> RandomSource:
    """Return a reproducible source backed by its own ``random.Random``."""

    return random_source(random.Random(seed))


def constant_source(value: int) -> RandomSource:
    """Always return ``value``; useful for pinning draws in tests."""

    def draw(low: int, high: int) -> int:
        return value

    return draw


__all__ = ["constant_source", "random_source", "seeded_source"]
