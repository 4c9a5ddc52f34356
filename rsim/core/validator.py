"""Input validation utilities."""

from __future__ import annotations

import math
from typing import List

from ..models.config import SimulationConfig


class ValidationError(Exception):
    """Custom error for validation related issues."""


def validate_config(config: SimulationConfig) -> List[str]:
    """
    Reject configurations the engine would run but produce meaningless output for.

    Returns a list of warnings for inputs that are suspicious but runnable.
    """
    if not math.isfinite(config.start_equity) or config.start_equity <= 0:
        raise ValidationError(f"start_equity must be positive, got {config.start_equity!r}")
    if not config.buckets:
        raise ValidationError("At least one outcome bucket is required.")
    if not 1 <= config.start_month <= 12:
        raise ValidationError(f"start_month must be between 1 and 12, got {config.start_month}")
    if config.progressive is not None and config.progressive.min_risk > config.progressive.max_risk:
        raise ValidationError(
            "Progressive exposure min_risk "
            f"({config.progressive.min_risk}) exceeds max_risk ({config.progressive.max_risk})"
        )

    warnings: List[str] = []
    seen = set()
    duplicates = set()
    for bucket in config.buckets:
        if bucket.id in seen:
            duplicates.add(bucket.id)
        seen.add(bucket.id)
        if bucket.p < 0:
            warnings.append(f"Bucket {bucket.id!r} has a negative weight; it will be treated as 0.")
        if not bucket.is_point:
            lo, hi = bucket.bounds
            if lo > hi:
                warnings.append(f"Bucket {bucket.id!r} has lo > hi ({lo} > {hi}).")
    if duplicates:
        warnings.append("Duplicate bucket ids: " + ", ".join(sorted(duplicates)))

    total = sum(max(0.0, bucket.p) for bucket in config.buckets)
    if total == 0:
        warnings.append("All bucket weights are zero; every trade uses the last bucket.")
    elif abs(total - 1.0) > 1e-6:
        warnings.append(f"Bucket weights sum to {total:.4f}; they will be normalised to 1.")

    if config.risk_fraction < 0:
        warnings.append("risk_fraction is negative; losses and wins swap sign in equity.")
    return warnings


__all__ = ["ValidationError", "validate_config"]
