"""Risk-of-ruin and annualised metrics for individual equity paths."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from .selection import closest_path_index
from .statistics import max_drawdown


@dataclass(frozen=True)
class PathMetrics:
    """Annualised performance summary of one equity path."""

    percentile: float
    path_index: int
    annualized_return: float
    sharpe: float
    calmar: float
    max_drawdown: float
    annualized_std: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def risk_of_ruin(max_drawdowns: Sequence[float], threshold_pct: float) -> float:
    """Share of paths whose max drawdown magnitude reaches ``|threshold_pct|`` percent."""
    if len(max_drawdowns) == 0:
        return 0.0
    threshold = abs(threshold_pct) / 100.0
    drawdowns = np.abs(np.asarray(max_drawdowns, dtype=float))
    return float(np.count_nonzero(drawdowns >= threshold)) / drawdowns.size


def trade_returns(equity_path: Sequence[float], start_equity: float) -> np.ndarray:
    """Simple return of every trade relative to the equity before it."""
    equity = np.asarray(equity_path, dtype=float)
    previous = np.concatenate(([float(start_equity)], equity[:-1]))
    out = np.zeros_like(equity)
    np.divide(equity, previous, out=out, where=previous != 0)
    out[previous != 0] -= 1.0
    return out


def path_metrics(
    equity_path: Sequence[float],
    start_equity: float,
    trades_per_year: int,
    *,
    percentile: float = 50.0,
    path_index: int = 0,
) -> PathMetrics:
    """
    Annualise a path's return and volatility.

    Returns compound over ``trades_per_year / n_trades`` periods; per-trade
    volatility uses the sample standard deviation and is scaled by
    ``sqrt(trades_per_year)``. Sharpe and Calmar are 0 when their
    denominators are 0.
    """
    equity = np.asarray(equity_path, dtype=float)
    n_trades = equity.size
    trades_per_year = max(1, int(trades_per_year))
    if n_trades == 0:
        return PathMetrics(percentile, path_index, 0.0, 0.0, 0.0, 0.0, 0.0)

    total_return = equity[-1] / start_equity - 1 if start_equity else 0.0
    growth = 1 + total_return
    if growth > 0:
        annualized = growth ** (trades_per_year / n_trades) - 1
    else:
        annualized = -1.0

    returns = trade_returns(equity, start_equity)
    mean = float(returns.sum() / max(1, n_trades))
    variance = float(((returns - mean) ** 2).sum() / max(1, n_trades - 1))
    std = math.sqrt(variance)
    sharpe = 0.0 if std == 0 else mean / std * math.sqrt(trades_per_year)
    dd = max_drawdown(equity)
    calmar = 0.0 if dd == 0 else annualized / abs(dd)

    return PathMetrics(
        percentile=percentile,
        path_index=path_index,
        annualized_return=float(annualized),
        sharpe=float(sharpe),
        calmar=float(calmar),
        max_drawdown=float(dd),
        annualized_std=float(std * math.sqrt(trades_per_year)),
    )


def percentile_path_metrics(
    equity_paths: Sequence[Sequence[float]],
    final_equity: Sequence[float],
    start_equity: float,
    trades_per_year: int,
    percentiles: Iterable[float] = range(10, 100, 10),
) -> List[PathMetrics]:
    """Metrics for the actual path closest to each requested percentile of final equity."""
    rows: List[PathMetrics] = []
    for p in percentiles:
        idx = closest_path_index(final_equity, p)
        rows.append(
            path_metrics(
                equity_paths[idx],
                start_equity,
                trades_per_year,
                percentile=p,
                path_index=idx,
            )
        )
    return rows


def metrics_frame(rows: Iterable[PathMetrics]) -> pd.DataFrame:
    """Tabulate path metrics, one row per percentile."""
    return pd.DataFrame([row.to_dict() for row in rows])


__all__ = [
    "PathMetrics",
    "metrics_frame",
    "path_metrics",
    "percentile_path_metrics",
    "risk_of_ruin",
    "trade_returns",
]
