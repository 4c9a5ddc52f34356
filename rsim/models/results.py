"""Result data models for simulation runs."""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from ..core.selection import closest_path_index
from ..core.statistics import Histogram, build_percentile_table

REPRESENTATIVES = ("median", "best", "worst")


class MonthlyStatsRow(BaseModel):
    """Performance of one calendar block of trades on a single path."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    return_value: float = Field(..., description="End equity over start equity, minus one")
    max_drawdown: float = Field(..., description="Worst drawdown inside the block (<= 0)")
    win_rate: float = Field(..., description="Wins over decided (non-zero) trades")
    max_consecutive_losses: int
    end_equity: float


class SummaryStats(BaseModel):
    """5th/50th/95th percentiles of the per-path scalars."""

    model_config = ConfigDict(frozen=True)

    final5: float
    final50: float
    final95: float
    dd5: float
    dd50: float
    dd95: float
    mcl5: float
    mcl50: float
    mcl95: float


class SimulationResult(BaseModel):
    """Everything a presentation layer needs from one simulation run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    start_equity: float = Field(..., description="Equity every path started from")
    equity_paths: List[np.ndarray] = Field(..., description="Equity after each trade, per path")
    r_paths: List[np.ndarray] = Field(..., description="Sampled R multiple of each trade, per path")
    final_equity: List[float]
    max_drawdowns: List[float]
    max_consecutive_losses: List[int]
    median_idx: int
    best_idx: int
    worst_idx: int
    equity_min: float
    equity_max: float
    stats: SummaryStats
    drawdowns: Dict[str, List[float]] = Field(
        ..., description="Drawdown traces keyed by 'median', 'best' and 'worst'"
    )
    representative_losses: Dict[str, int] = Field(
        ..., description="Max consecutive losses keyed by representative path"
    )
    monthly_tables: Dict[str, List[MonthlyStatsRow]]
    histograms: Dict[str, Histogram] = Field(
        ..., description="Histograms keyed by 'drawdown' and 'final_equity'"
    )
    risk_of_ruin: float = Field(0.0, description="Share of paths breaching the ruin drawdown")
    risk_of_ruin_threshold: float = 30.0
    seed: Optional[int] = None

    @property
    def n_paths(self) -> int:
        return len(self.equity_paths)

    @property
    def n_trades(self) -> int:
        return int(self.equity_paths[0].size) if self.equity_paths else 0

    def representative_index(self, which: str) -> int:
        """Return the path index for 'median', 'best' or 'worst'."""
        mapping = {"median": self.median_idx, "best": self.best_idx, "worst": self.worst_idx}
        if which not in mapping:
            raise KeyError(f"Unknown representative path {which!r}")
        return mapping[which]

    def percentile_path_index(self, p: float) -> int:
        """Index of the actual path closest to the ``p``-th percentile of final equity."""
        return closest_path_index(self.final_equity, p)

    def percentile_path(self, p: float) -> np.ndarray:
        return self.equity_paths[self.percentile_path_index(p)]

    def monthly_frame(self, which: str = "median") -> pd.DataFrame:
        """Monthly table of a representative path as a dataframe."""
        rows = self.monthly_tables.get(which)
        if rows is None:
            raise KeyError(f"Unknown representative path {which!r}")
        columns = list(MonthlyStatsRow.model_fields)
        return pd.DataFrame([row.model_dump() for row in rows], columns=columns)

    def summary_frame(self) -> pd.DataFrame:
        """Percentile summary with one row per metric."""
        s = self.stats
        return pd.DataFrame(
            [
                {"metric": "final_equity", "p5": s.final5, "p50": s.final50, "p95": s.final95},
                {"metric": "max_drawdown", "p5": s.dd5, "p50": s.dd50, "p95": s.dd95},
                {"metric": "max_consecutive_losses", "p5": s.mcl5, "p50": s.mcl50, "p95": s.mcl95},
            ]
        )

    def percentile_table(self, percentiles=range(5, 100, 5)) -> pd.DataFrame:
        """Percentile ladder of final equity."""
        return build_percentile_table(self.final_equity, percentiles=percentiles, column="final_equity")


__all__ = ["MonthlyStatsRow", "REPRESENTATIVES", "SimulationResult", "SummaryStats"]
