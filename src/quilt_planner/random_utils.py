"""
Random sources for reproducible layout planning.

Two sources live here. ``SeededRandom`` is the 32-bit linear
congruential generator used whenever a plan seed is configured, so
identical inputs give identical plans on every platform. Without a seed
the planner falls back to the cached NumPy ``Generator``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

__all__ = [
    "NumpyRandom",
    "RandomSource",
    "SeededRandom",
    "current_numpy_seed",
    "get_numpy_rng",
    "make_random",
    "seed_numpy_rng",
]

T = TypeVar("T")

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


@dataclass(slots=True)
class _NumpyRngState:
    """State container for the cached Generator."""

    seed: int | None = None
    generator: np.random.Generator | None = None


_STATE = _NumpyRngState()


def seed_numpy_rng(seed: int) -> np.random.Generator:
    """Seed and cache the global NumPy Generator instance."""
    _STATE.seed = seed
    _STATE.generator = np.random.default_rng(seed)
    return _STATE.generator


def get_numpy_rng() -> np.random.Generator:
    """Return the cached Generator, creating an unseeded instance."""
    if _STATE.generator is None:
        _STATE.generator = np.random.default_rng()
    return _STATE.generator


def current_numpy_seed() -> int | None:
    """Expose the last configured NumPy seed for observability/testing."""
    return _STATE.seed


class RandomSource(Protocol):
    """Uniform source the planner draws from."""

    def random(self) -> float:
        """Return a float in [0, 1)."""
        ...

    def randrange(self, n: int) -> int:
        """Return an integer in [0, n)."""
        ...

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy of ``items``."""
        ...


class _DrawMixin(ABC):
    """Derived draws shared by both sources."""

    __slots__ = ()

    @abstractmethod
    def random(self) -> float:
        """Return a float in [0, 1)."""

    def randrange(self, n: int) -> int:
        """Return ``floor(random() * n)``, clamped into [0, n)."""
        if n <= 1:
            return 0
        return min(n - 1, int(self.random() * n))

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffle driven by this source; input is untouched."""
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = self.randrange(i + 1)
            out[i], out[j] = out[j], out[i]
        return out


class SeededRandom(_DrawMixin):
    """
    32-bit linear congruential generator.

    ``state = (state * 1664525 + 1013904223) mod 2**32`` and each draw
    returns ``state / 2**32``. A zero seed is replaced by 1.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = (int(seed) % _LCG_MODULUS) or 1

    def random(self) -> float:
        """Advance the generator and return a float in [0, 1)."""
        self._state = (
            self._state * _LCG_MULTIPLIER + _LCG_INCREMENT
        ) % _LCG_MODULUS
        return self._state / _LCG_MODULUS


class NumpyRandom(_DrawMixin):
    """Adapter exposing a NumPy Generator through ``RandomSource``."""

    __slots__ = ("_generator",)

    def __init__(self, generator: np.random.Generator | None = None) -> None:
        self._generator = generator or get_numpy_rng()

    def random(self) -> float:
        """Return a float in [0, 1) from the wrapped Generator."""
        return float(self._generator.random())


def make_random(seed: int | None) -> RandomSource:
    """Return the LCG for an explicit seed, the shared Generator otherwise."""
    if seed is None:
        return NumpyRandom()
    return SeededRandom(seed)
