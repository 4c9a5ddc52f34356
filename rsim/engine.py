"""High-level orchestration for a Monte Carlo run."""

from __future__ import annotations

import logging
import math
import time
from typing import List, Optional

from .core.buckets import BucketTable
from .core.monthly import monthly_stats_from_path
from .core.path_metrics import risk_of_ruin
from .core.path_simulator import PathResult, simulate_paths
from .core.rng import UniformSource, create_rng
from .core.selection import select_representatives
from .core.statistics import drawdown_series, histogram, percentile
from .models.config import SimulationConfig
from .models.results import REPRESENTATIVES, SimulationResult, SummaryStats

LOGGER = logging.getLogger(__name__)


def _summary_stats(
    final_equity: List[float],
    max_drawdowns: List[float],
    max_losses: List[int],
) -> SummaryStats:
    return SummaryStats(
        final5=percentile(final_equity, 5),
        final50=percentile(final_equity, 50),
        final95=percentile(final_equity, 95),
        dd5=percentile(max_drawdowns, 5),
        dd50=percentile(max_drawdowns, 50),
        dd95=percentile(max_drawdowns, 95),
        mcl5=percentile(max_losses, 5),
        mcl50=percentile(max_losses, 50),
        mcl95=percentile(max_losses, 95),
    )


def aggregate_paths(config: SimulationConfig, paths: List[PathResult]) -> SimulationResult:
    """Derive percentiles, representative paths, monthly tables and histograms."""
    final_equity = [float(path.final_equity) for path in paths]
    max_drawdowns = [float(path.max_drawdown) for path in paths]
    max_losses = [int(path.max_consecutive_losses) for path in paths]

    equity_min = math.inf
    equity_max = -math.inf
    for path in paths:
        if path.equity.size:
            equity_min = min(equity_min, float(path.equity.min()))
            equity_max = max(equity_max, float(path.equity.max()))

    reps = select_representatives(final_equity).as_dict()
    drawdowns = {name: drawdown_series(paths[idx].equity) for name, idx in reps.items()}
    monthly = {
        name: monthly_stats_from_path(
            paths[idx].equity,
            paths[idx].outcomes,
            config.start_equity,
            config.trades_per_month,
            config.start_year,
            config.start_month,
        )
        for name, idx in reps.items()
    }

    return SimulationResult(
        start_equity=config.start_equity,
        equity_paths=[path.equity for path in paths],
        r_paths=[path.outcomes for path in paths],
        final_equity=final_equity,
        max_drawdowns=max_drawdowns,
        max_consecutive_losses=max_losses,
        median_idx=reps["median"],
        best_idx=reps["best"],
        worst_idx=reps["worst"],
        equity_min=equity_min,
        equity_max=equity_max,
        stats=_summary_stats(final_equity, max_drawdowns, max_losses),
        drawdowns=drawdowns,
        representative_losses={name: max_losses[reps[name]] for name in REPRESENTATIVES},
        monthly_tables=monthly,
        histograms={
            "drawdown": histogram(max_drawdowns, config.histogram_bins),
            "final_equity": histogram(final_equity, config.histogram_bins),
        },
        risk_of_ruin=risk_of_ruin(max_drawdowns, config.risk_of_ruin_threshold),
        risk_of_ruin_threshold=config.risk_of_ruin_threshold,
        seed=config.seed,
    )


def run_simulation(config: SimulationConfig, rng: Optional[UniformSource] = None) -> SimulationResult:
    """
    Simulate every path described by ``config`` and aggregate the results.

    Paths run in index order against a single uniform stream, so a seeded
    configuration always reproduces the same result. ``rng`` overrides the
    stream built from ``config.seed``.
    """
    started = time.perf_counter()
    if rng is None:
        rng = create_rng(config.seed)
    if config.seed is None:
        LOGGER.info("No seed supplied; results will not be reproducible.")

    LOGGER.info(
        "Running %d paths x %d trades (risk %.4f, %d buckets, progressive=%s)",
        config.n_paths,
        config.n_trades,
        config.risk_fraction,
        len(config.buckets),
        config.progressive is not None,
    )
    table = BucketTable.from_buckets(config.buckets)
    paths = simulate_paths(config, table, rng)
    result = aggregate_paths(config, paths)
    LOGGER.info(
        "Simulation finished in %.2fs: median final equity %.2f, median max drawdown %.4f",
        time.perf_counter() - started,
        result.stats.final50,
        result.stats.dd50,
    )
    return result


__all__ = ["aggregate_paths", "run_simulation"]
