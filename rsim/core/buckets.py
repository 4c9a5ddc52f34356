"""Normalised bucket distribution table and trade outcome sampling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..models.bucket import Bucket
from .rng import UniformSource

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketTable:
    """Probability-weighted view over a bucket list, rebuilt once per run."""

    buckets: Tuple[Bucket, ...]
    probabilities: Tuple[float, ...]
    cumulative: Tuple[float, ...]

    @classmethod
    def from_buckets(cls, buckets: Sequence[Bucket]) -> "BucketTable":
        """
        Clamp weights at zero and normalise them by their sum.

        A zero total is treated as 1 so the table never produces NaN; in that
        case every draw falls through to the last bucket.
        """
        weights = [max(0.0, float(bucket.p)) for bucket in buckets]
        total = sum(weights)
        if total == 0:
            if buckets:
                LOGGER.warning("All %d bucket weights are zero; draws fall back to the last bucket.", len(buckets))
            total = 1.0
        probabilities = [weight / total for weight in weights]

        cumulative: List[float] = []
        running = 0.0
        for prob in probabilities:
            running += prob
            cumulative.append(running)
        return cls(tuple(buckets), tuple(probabilities), tuple(cumulative))

    def __len__(self) -> int:
        return len(self.buckets)

    def locate(self, u: float) -> int:
        """Return the index of the first bucket whose cumulative weight is >= ``u``."""
        for idx, threshold in enumerate(self.cumulative):
            if u <= threshold:
                return idx
        return len(self.buckets) - 1

    def sample(self, rng: UniformSource) -> float:
        """Draw one R multiple; uniform buckets consume a second draw."""
        if not self.buckets:
            return 0.0
        bucket = self.buckets[self.locate(rng.random())]
        if bucket.is_point:
            return bucket.value
        lo, hi = bucket.bounds
        return lo + (hi - lo) * rng.random()


__all__ = ["BucketTable"]
