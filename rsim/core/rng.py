"""Seedable uniform random sources used by the path simulator."""

from __future__ import annotations

import math
from typing import Optional, Protocol, Union

import numpy as np

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


class UniformSource(Protocol):
    """Anything exposing ``random()`` returning a float in ``[0, 1)``."""

    def random(self) -> float:  # pragma: no cover - protocol
        ...


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Small 32-bit mixing generator with explicit, copyable state."""

    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state = int(seed) & _MASK32

    def random(self) -> float:
        """Advance the state and return the next uniform value in ``[0, 1)``."""
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32


def normalise_seed(seed: Optional[Union[int, float]]) -> Optional[int]:
    """Return an integer seed, or ``None`` when the input is missing or non-finite."""
    if seed is None or isinstance(seed, bool):
        return None
    if isinstance(seed, (int, np.integer)):
        return int(seed)
    try:
        value = float(seed)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return int(math.trunc(value))


def create_rng(seed: Optional[Union[int, float]] = None) -> UniformSource:
    """
    Build the uniform source for a simulation run.

    A finite seed yields a reproducible ``Mulberry32`` stream. Anything else
    falls back to a freshly entropy-seeded ``numpy.random.Generator``.
    """
    resolved = normalise_seed(seed)
    if resolved is None:
        return np.random.default_rng()
    return Mulberry32(resolved)


__all__ = ["Mulberry32", "UniformSource", "create_rng", "normalise_seed"]
