"""Calendar-month rollups of a single equity path."""

from __future__ import annotations

import math
from typing import List, Sequence

from ..models.results import MonthlyStatsRow


def monthly_stats_from_path(
    equity_path: Sequence[float],
    outcome_path: Sequence[float],
    start_equity: float,
    trades_per_month: int,
    start_year: int,
    start_month: int,
) -> List[MonthlyStatsRow]:
    """
    Split a path into blocks of ``trades_per_month`` trades and summarise each.

    Parameters
    ----------
    equity_path:
        Equity after each trade.
    outcome_path:
        R multiple of each trade, aligned with ``equity_path``.
    start_equity:
        Equity before the first trade; the first block's return is measured from it.
    trades_per_month:
        Block size, floored at 1. The final block may be shorter.
    start_year, start_month:
        Calendar label of the first block. Months wrap from 12 to 1.
    """
    n_trades = len(equity_path)
    block = max(1, int(trades_per_month))
    n_months = math.ceil(n_trades / block)
    rows: List[MonthlyStatsRow] = []
    prev_equity = float(start_equity)
    year = int(start_year)
    month = int(start_month)

    for m in range(n_months):
        start_idx = m * block
        end_idx = min((m + 1) * block, n_trades) - 1
        if end_idx < start_idx:
            break

        end_equity = float(equity_path[end_idx])
        return_value = end_equity / prev_equity - 1 if prev_equity != 0 else 0.0

        peak = prev_equity
        min_dd = 0.0
        for i in range(start_idx, end_idx + 1):
            value = float(equity_path[i])
            if value > peak:
                peak = value
            if peak > 0:
                dd = value / peak - 1
                if dd < min_dd:
                    min_dd = dd

        wins = 0
        losses = 0
        streak = 0
        longest = 0
        for i in range(start_idx, end_idx + 1):
            r = outcome_path[i]
            if r > 0:
                wins += 1
                streak = 0
            elif r < 0:
                losses += 1
                streak += 1
                longest = max(longest, streak)
            else:
                streak = 0
        decided = wins + losses

        rows.append(
            MonthlyStatsRow(
                year=year,
                month=month,
                return_value=return_value,
                max_drawdown=min_dd,
                win_rate=wins / decided if decided else 0.0,
                max_consecutive_losses=longest,
                end_equity=end_equity,
            )
        )

        prev_equity = end_equity
        month += 1
        if month == 13:
            month = 1
            year += 1

    return rows


__all__ = ["monthly_stats_from_path"]
