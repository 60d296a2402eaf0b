"""Stats Results Schemas: the subset of the Optimizely Stats API results object we read.

Invariants:
    - Required: start_time, end_time, experiment_id, metrics[], reach.variations{},
      reach.total_count, stats_config.confidence_level
    - Mapping fields (metric results, reach variations) keep vendor iteration order
    - Naive timestamps are interpreted as UTC
    - Unknown vendor fields are ignored
    - NaN and infinity are rejected
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _VendorModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)


class LiftResult(_VendorModel):
    """Lift of a treatment over the baseline, as 0-1 fractions."""
    value: float
    significance: float


class VariationResult(_VendorModel):
    """One variation's figures for a single metric."""
    name: str
    rate: float
    lift: LiftResult | None = None


class MetricResult(_VendorModel):
    name: str
    results: dict[str, VariationResult]


class ReachVariation(_VendorModel):
    name: str
    count: int
    is_baseline: bool = False


class Reach(_VendorModel):
    variations: dict[str, ReachVariation]
    total_count: int


class StatsConfig(_VendorModel):
    confidence_level: float = Field(ge=0, le=1)


class StatsResults(_VendorModel):
    """Top-level Stats API results payload for one experiment."""
    experiment_id: int | str
    start_time: datetime
    end_time: datetime
    metrics: list[MetricResult]
    reach: Reach
    stats_config: StatsConfig

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
