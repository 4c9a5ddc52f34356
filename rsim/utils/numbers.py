"""Numeric helper functions shared across the application."""

from __future__ import annotations

import math
from typing import Any


def coerce_count(value: Any, minimum: int = 1) -> int:
    """Truncate ``value`` to an int no smaller than ``minimum``; junk input yields ``minimum``."""
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(numeric):
        return minimum
    return max(minimum, int(math.trunc(numeric)))


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator - 1`` or 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator - 1.0


__all__ = ["coerce_count", "safe_ratio"]
