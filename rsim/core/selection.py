"""Representative path selection by final equity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence

from .statistics import percentile


@dataclass(frozen=True)
class RepresentativeIndices:
    """Indices of the median, best and worst paths."""

    median: int
    best: int
    worst: int

    def as_dict(self) -> Dict[str, int]:
        return {"median": self.median, "best": self.best, "worst": self.worst}


def select_representatives(final_equity: Sequence[float]) -> RepresentativeIndices:
    """
    Pick best (max), worst (min) and median paths in a single scan.

    The median path is the one whose final equity is closest to the 50th
    percentile value, which need not be a simulated value itself. Ties go to
    the earliest index.
    """
    target = percentile(final_equity, 50)
    median_idx = best_idx = worst_idx = 0
    best_value = -math.inf
    worst_value = math.inf
    closest = math.inf

    for idx, value in enumerate(final_equity):
        value = float(value)
        if value > best_value:
            best_value = value
            best_idx = idx
        if value < worst_value:
            worst_value = value
            worst_idx = idx
        distance = abs(value - target)
        if distance < closest:
            closest = distance
            median_idx = idx

    return RepresentativeIndices(median=median_idx, best=best_idx, worst=worst_idx)


def closest_path_index(final_equity: Sequence[float], p: float) -> int:
    """Index of the path whose final equity is nearest the ``p``-th percentile."""
    target = percentile(final_equity, p)
    best_idx = 0
    closest = math.inf
    for idx, value in enumerate(final_equity):
        distance = abs(float(value) - target)
        if distance < closest:
            closest = distance
            best_idx = idx
    return best_idx


def percentile_path_indices(
    final_equity: Sequence[float],
    percentiles: Iterable[float] = range(10, 100, 10),
) -> Dict[float, int]:
    """Map each requested percentile to its closest actual path."""
    return {p: closest_path_index(final_equity, p) for p in percentiles}


__all__ = [
    "RepresentativeIndices",
    "closest_path_index",
    "percentile_path_indices",
    "select_representatives",
]
