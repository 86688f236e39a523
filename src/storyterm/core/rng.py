"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Protocol


class RandomSource(Protocol):
    """Capability required by the story executor to reorder prompts."""

    def randrange(self, start: int, stop: int) -> int:
        """Return a uniformly random integer N such that start <= N < stop."""
        ...


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randrange(self, start: int, stop: int) -> int:
        """Return a random integer N such that start <= N < stop."""
        if stop <= start:
            raise ValueError(f"Empty range [{start}, {stop}).")
        return self._random.randrange(start, stop)
