"""Data models for configuration and results."""

from .bucket import DEFAULT_BUCKETS, Bucket, BucketType
from .config import ProgressiveExposure, SimulationConfig
from .results import MonthlyStatsRow, SimulationResult, SummaryStats

__all__ = [
    "Bucket",
    "BucketType",
    "DEFAULT_BUCKETS",
    "MonthlyStatsRow",
    "ProgressiveExposure",
    "SimulationConfig",
    "SimulationResult",
    "SummaryStats",
]
