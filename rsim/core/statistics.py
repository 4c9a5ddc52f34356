"""Percentile, drawdown, streak and histogram primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..utils.numbers import safe_ratio


def _as_array(values: Iterable[float]) -> np.ndarray:
    if not isinstance(values, (np.ndarray, list, tuple)):
        values = list(values)
    return np.asarray(values, dtype=float)


def percentile(values: Iterable[float], p: float) -> float:
    """
    Linearly interpolated percentile of ``values``.

    The fractional rank is ``p / 100 * (n - 1)`` over the ascending sort;
    integral ranks return the element itself. Empty input returns 0.0.
    """
    ordered = np.sort(_as_array(values))
    if ordered.size == 0:
        return 0.0
    p = min(100.0, max(0.0, float(p)))
    index = (p / 100.0) * (ordered.size - 1)
    lo = math.floor(index)
    hi = math.ceil(index)
    if lo == hi:
        return float(ordered[lo])
    t = index - lo
    return float(ordered[lo] + (ordered[hi] - ordered[lo]) * t)


def max_drawdown(series: Sequence[float]) -> float:
    """Most negative ``value / running_peak - 1`` over the series (0.0 when empty)."""
    if len(series) == 0:
        return 0.0
    peak = float(series[0])
    worst = 0.0
    for value in series:
        value = float(value)
        if value > peak:
            peak = value
        dd = safe_ratio(value, peak)
        if dd < worst:
            worst = dd
    return worst


def drawdown_series(series: Sequence[float]) -> List[float]:
    """Per-point drawdown from the running peak."""
    out: List[float] = []
    if len(series) == 0:
        return out
    peak = float(series[0])
    for value in series:
        value = float(value)
        if value > peak:
            peak = value
        out.append(safe_ratio(value, peak))
    return out


def max_consecutive_losses(outcomes: Iterable[float]) -> int:
    """Longest run of strictly negative outcomes; zero or positive values end a run."""
    longest = 0
    run = 0
    for outcome in outcomes:
        if outcome < 0:
            run += 1
            if run > longest:
                longest = run
        else:
            run = 0
    return longest


@dataclass(frozen=True)
class Histogram:
    """Raw-frequency histogram with left bin edges."""

    bins: List[float]
    counts: List[int]
    min: float
    max: float

    @property
    def total(self) -> int:
        return int(sum(self.counts))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"bin_start": self.bins, "count": self.counts})


def histogram(values: Iterable[float], bin_count: int) -> Histogram:
    """Bucket ``values`` into ``bin_count`` equal-width bins between their min and max."""
    bin_count = max(1, int(bin_count))
    arr = _as_array(values)
    if arr.size == 0:
        return Histogram(bins=[0.0] * bin_count, counts=[0] * bin_count, min=0.0, max=0.0)

    lo = float(arr.min())
    hi = float(arr.max())
    span = (hi - lo) or 1.0
    bins = [lo + (i * span) / bin_count for i in range(bin_count)]
    idx = np.floor((arr - lo) / span * bin_count).astype(np.int64)
    idx = np.clip(idx, 0, bin_count - 1)
    counts = np.bincount(idx, minlength=bin_count)
    return Histogram(bins=bins, counts=[int(c) for c in counts], min=lo, max=hi)


def build_percentile_table(
    values: Sequence[float],
    *,
    percentiles: Iterable[int] = range(5, 100, 5),
    column: str = "value",
) -> pd.DataFrame:
    """Return a percentile ladder as a dataframe."""
    ladder = [{"percentile": p, column: percentile(values, p)} for p in percentiles]
    return pd.DataFrame(ladder, columns=["percentile", column])


__all__ = [
    "Histogram",
    "build_percentile_table",
    "drawdown_series",
    "histogram",
    "max_consecutive_losses",
    "max_drawdown",
    "percentile",
]
