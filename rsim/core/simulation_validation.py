"""Sanity checks on completed simulation results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from ..models.results import SimulationResult


@dataclass
class ValidationResult:
    """Basic container for validation outcomes."""

    status: str
    failed_checks: Sequence[str]
    warnings: Sequence[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
        }


def validate_result(result: SimulationResult) -> ValidationResult:
    """Run basic sanity checks on simulated equity paths and their summaries."""
    failed: list[str] = []
    warnings: list[str] = []

    if not result.equity_paths:
        failed.append("no_paths")
        return ValidationResult(status="FAIL", failed_checks=failed, warnings=warnings)

    stacked = np.vstack(result.equity_paths)
    if np.any(np.isnan(stacked)) or np.any(np.isinf(stacked)):
        failed.append("nan_or_inf_equity")
    if float(stacked.min(initial=np.inf)) <= 0.0:
        warnings.append("non_positive_equity")

    series = pd.Series(result.final_equity, dtype=float)
    ladder = series.quantile([0.05, 0.25, 0.50, 0.75, 0.95])
    if not ladder.is_monotonic_increasing:
        failed.append("percentile_ordering")
    if not result.stats.final5 <= result.stats.final50 <= result.stats.final95:
        failed.append("summary_ordering")

    if any(dd > 0 for dd in result.max_drawdowns):
        failed.append("positive_drawdown")
    if result.n_paths < 100:
        warnings.append("few_paths")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


__all__ = ["ValidationResult", "validate_result"]
