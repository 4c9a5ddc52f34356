"""Outcome bucket data models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BucketType(str, Enum):
    """Supported outcome distributions inside a bucket."""

    UNIFORM = "uniform"
    POINT = "point"


class Bucket(BaseModel):
    """A named, probability-weighted regime of R-multiple outcomes."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Bucket identifier")
    name: str = Field("", description="Display name")
    p: float = Field(
        0.0,
        description="Raw probability weight. Negative weights are clamped to zero at run time.",
    )
    type: BucketType = Field(BucketType.POINT, description="Distribution kind")
    v: Optional[float] = Field(None, description="Fixed R multiple for point buckets")
    lo: Optional[float] = Field(None, description="Lower R bound for uniform buckets")
    hi: Optional[float] = Field(None, description="Upper R bound for uniform buckets")

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bucket id cannot be empty")
        return value

    @property
    def is_point(self) -> bool:
        return self.type == BucketType.POINT

    @property
    def value(self) -> float:
        return float(self.v) if self.v is not None else 0.0

    @property
    def bounds(self) -> tuple[float, float]:
        lo = float(self.lo) if self.lo is not None else 0.0
        hi = float(self.hi) if self.hi is not None else 0.0
        return lo, hi


DEFAULT_BUCKETS: List[Bucket] = [
    Bucket(id="fat_tail_loss", name="Fat tail loss", p=0.01, type=BucketType.UNIFORM, lo=-5, hi=-1.5),
    Bucket(id="hard_loss", name="Hard loss", p=0.49, type=BucketType.POINT, v=-1),
    Bucket(id="norm_loss", name="Normal loss", p=0.10, type=BucketType.UNIFORM, lo=-0.9, hi=-0.5),
    Bucket(id="scratch", name="Scratch", p=0.10, type=BucketType.UNIFORM, lo=-0.5, hi=0),
    Bucket(id="small_win", name="Small win", p=0.28, type=BucketType.UNIFORM, lo=0.1, hi=3),
    Bucket(id="big_win", name="Big win", p=0.02, type=BucketType.UNIFORM, lo=15, hi=30),
]


__all__ = ["Bucket", "BucketType", "DEFAULT_BUCKETS"]
