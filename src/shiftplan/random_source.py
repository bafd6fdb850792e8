from __future__ import annotations

from typing import Optional, Protocol, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can return a shuffled copy of a sequence."""

    def shuffle(self, items: Sequence[T]) -> list[T]: ...


def _rng(seed: Optional[int | np.random.SeedSequence]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


class NumpyRandomSource:
    """Shuffles through a numpy Generator; pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int | np.random.SeedSequence] = None) -> None:
        self._g = _rng(seed)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        order = self._g.permutation(len(items))
        return [items[int(i)] for i in order]


class IdentityRandomSource:
    """Keeps input order. Makes generation fully deterministic in tests."""

    def shuffle(self, items: Sequence[T]) -> list[T]:
        return list(items)


def spawn_sources(seed: Optional[int], n: int) -> list[NumpyRandomSource]:
    """Independent child sources, one per role-scoped call."""
    children = np.random.SeedSequence(seed).spawn(n)
    return [NumpyRandomSource(child) for child in children]
