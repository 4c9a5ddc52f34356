"""Progressive exposure: streak-driven risk scaling within a single path."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

from ..models.config import ProgressiveExposure


def _threshold(value: float) -> int:
    try:
        return max(1, int(math.trunc(value)))
    except (OverflowError, ValueError):
        return 1


@dataclass(frozen=True)
class ExposureState:
    """Current risk fraction and the running win/loss streaks."""

    risk: float
    win_streak: int = 0
    loss_streak: int = 0

    @classmethod
    def initial(cls, risk_fraction: float) -> "ExposureState":
        return cls(risk=float(risk_fraction))


def step_exposure(
    state: ExposureState,
    outcome: float,
    policy: Optional[ProgressiveExposure],
) -> ExposureState:
    """
    Return the state after observing ``outcome``.

    Only the outcome sign matters. A win streak reaching its threshold doubles
    the risk (capped at ``max_risk``); a loss streak reaching its threshold
    halves it (floored at ``min_risk``). The triggering streak restarts at zero.
    Without a policy the state is returned unchanged.
    """
    if policy is None:
        return state

    if outcome > 0:
        wins = state.win_streak + 1
        if wins >= _threshold(policy.win_streak_threshold):
            return ExposureState(risk=min(policy.max_risk, state.risk * 2), win_streak=0, loss_streak=0)
        return ExposureState(risk=state.risk, win_streak=wins, loss_streak=0)

    if outcome < 0:
        losses = state.loss_streak + 1
        if losses >= _threshold(policy.loss_streak_threshold):
            return ExposureState(risk=max(policy.min_risk, state.risk / 2), win_streak=0, loss_streak=0)
        return ExposureState(risk=state.risk, win_streak=0, loss_streak=losses)

    return replace(state, win_streak=0, loss_streak=0)


__all__ = ["ExposureState", "step_exposure"]
