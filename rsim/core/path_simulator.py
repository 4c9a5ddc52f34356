"""Per-path equity simulation under a bucketed R-multiple distribution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..models.config import ProgressiveExposure, SimulationConfig
from ..utils.numbers import coerce_count
from .buckets import BucketTable
from .exposure import ExposureState, step_exposure
from .rng import UniformSource
from .statistics import max_consecutive_losses


@dataclass(frozen=True)
class PathResult:
    """Equity and raw outcome series for one simulated path."""

    equity: np.ndarray
    outcomes: np.ndarray
    final_equity: float
    max_drawdown: float
    max_consecutive_losses: int
    final_risk: float


def simulate_path(
    table: BucketTable,
    rng: UniformSource,
    *,
    start_equity: float,
    n_trades: int,
    risk_fraction: float,
    progressive: Optional[ProgressiveExposure] = None,
) -> PathResult:
    """
    Simulate ``n_trades`` compounding trades.

    Each step samples an R multiple, applies ``equity *= 1 + risk * r`` and
    then lets the progressive exposure policy (if any) adjust the risk for the
    next trade. The running drawdown is tracked against a peak seeded at the
    start equity.
    """
    n_trades = coerce_count(n_trades)
    equity_path = np.empty(n_trades, dtype=float)
    outcome_path = np.empty(n_trades, dtype=float)

    equity = float(start_equity)
    peak = equity
    min_dd = 0.0
    state = ExposureState.initial(risk_fraction)

    for t in range(n_trades):
        outcome = table.sample(rng)
        outcome_path[t] = outcome
        equity *= 1 + state.risk * outcome
        equity_path[t] = equity
        if equity > peak:
            peak = equity
        if peak > 0:
            dd = equity / peak - 1
            if dd < min_dd:
                min_dd = dd
        state = step_exposure(state, outcome, progressive)

    final_equity = float(equity_path[-1]) if n_trades else equity
    return PathResult(
        equity=equity_path,
        outcomes=outcome_path,
        final_equity=final_equity,
        max_drawdown=min_dd,
        max_consecutive_losses=max_consecutive_losses(outcome_path),
        final_risk=state.risk,
    )


def simulate_paths(config: SimulationConfig, table: BucketTable, rng: UniformSource) -> List[PathResult]:
    """Simulate every path in index order against one shared PRNG stream."""
    return [
        simulate_path(
            table,
            rng,
            start_equity=config.start_equity,
            n_trades=config.n_trades,
            risk_fraction=config.risk_fraction,
            progressive=config.progressive,
        )
        for _ in range(coerce_count(config.n_paths))
    ]


__all__ = ["PathResult", "simulate_path", "simulate_paths"]
