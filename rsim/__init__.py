"""Monte Carlo simulator for risk-sized trades under R-multiple outcome buckets."""

from .engine import aggregate_paths, run_simulation
from .models import (
    DEFAULT_BUCKETS,
    Bucket,
    BucketType,
    ProgressiveExposure,
    SimulationConfig,
    SimulationResult,
)

__version__ = "0.1.0"

__all__ = [
    "Bucket",
    "BucketType",
    "DEFAULT_BUCKETS",
    "ProgressiveExposure",
    "SimulationConfig",
    "SimulationResult",
    "aggregate_paths",
    "run_simulation",
]
