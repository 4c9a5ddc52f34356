"""Simulation configuration models."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..core.rng import normalise_seed
from ..utils.numbers import coerce_count
from .bucket import DEFAULT_BUCKETS, Bucket

LOGGER = logging.getLogger(__name__)

DEFAULT_SEED = 25


class ProgressiveExposure(BaseModel):
    """Streak thresholds and risk bounds for progressive exposure."""

    model_config = ConfigDict(frozen=True)

    loss_streak_threshold: int = Field(
        3, description="Consecutive losses that halve the risk fraction."
    )
    win_streak_threshold: int = Field(
        3, description="Consecutive wins that double the risk fraction."
    )
    min_risk: float = Field(0.001, description="Floor for the risk fraction (decimal).")
    max_risk: float = Field(0.01, description="Cap for the risk fraction (decimal).")

    @field_validator("loss_streak_threshold", "win_streak_threshold", mode="before")
    @classmethod
    def _coerce_threshold(cls, value: Any) -> int:
        return coerce_count(value)


class SimulationConfig(BaseModel):
    """Immutable inputs for a single simulation run."""

    model_config = ConfigDict(frozen=True)

    start_equity: float = Field(300_000.0, description="Equity at the start of every path")
    n_trades: int = Field(600, description="Trades per path (coerced to >= 1)")
    n_paths: int = Field(1000, description="Number of simulated paths (coerced to >= 1)")
    risk_fraction: float = Field(
        0.003, description="Fraction of equity risked per trade, applied to the R multiple."
    )
    seed: Optional[int] = Field(
        DEFAULT_SEED, description="PRNG seed; None or non-finite input means non-reproducible."
    )
    trades_per_month: int = Field(50, description="Trades per calendar block in monthly tables")
    start_year: int = Field(2026, description="Calendar year of the first monthly block")
    start_month: int = Field(1, description="Calendar month (1-12) of the first monthly block")
    buckets: List[Bucket] = Field(
        default_factory=lambda: list(DEFAULT_BUCKETS),
        description="Outcome buckets defining the per-trade R distribution",
    )
    progressive: Optional[ProgressiveExposure] = Field(
        None, description="Progressive exposure policy; None disables it."
    )
    risk_of_ruin_threshold: float = Field(
        30.0, description="Drawdown (percent) at or beyond which a path counts as ruined."
    )
    histogram_bins: int = Field(60, description="Bins used for the drawdown and final equity histograms")

    @field_validator("n_trades", "n_paths", "trades_per_month", "histogram_bins", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any, info: ValidationInfo) -> int:
        count = coerce_count(value)
        if count != value:
            LOGGER.warning("Coerced %s=%r to %d.", info.field_name, value, count)
        return count

    @field_validator("seed", mode="before")
    @classmethod
    def _coerce_seed(cls, value: Any) -> Optional[int]:
        resolved = normalise_seed(value)
        if resolved is None and value is not None:
            LOGGER.warning("Ignoring non-finite seed %r; using a non-reproducible generator.", value)
        return resolved

    @property
    def trades_per_year(self) -> int:
        return max(1, self.trades_per_month) * 12

    def to_metadata(self) -> Dict[str, object]:
        """Serialise into a JSON-friendly mapping."""
        return self.model_dump(mode="json")

    @classmethod
    def from_metadata(cls, metadata: Dict[str, object]) -> "SimulationConfig":
        """Rehydrate a configuration, keeping defaults for absent keys.

        A record without a ``seed`` runs unseeded.
        """
        payload = dict(metadata)
        payload.setdefault("seed", None)
        if payload.get("buckets") in (None, []):
            payload.pop("buckets", None)
        return cls.model_validate(payload)


__all__ = ["DEFAULT_SEED", "ProgressiveExposure", "SimulationConfig"]
