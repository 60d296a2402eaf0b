"""Transform Results: Optimizely Stats API results -> Experiment Report Payload fields.

Invariants:
    - duration = ceil((end - start) / 1 day), rendered "{n} days"
    - dateRange = "{Mon} {Day}, {Year} - {Mon} {Day}, {Year}" in UTC
    - value/significance/confidenceLevel are the vendor 0-1 fractions * 100
    - Metric lift = max lift.value over variations that report a lift;
      "+{v*100:.1f}%" when that max exists and is positive, else "N/A"
    - Missing or malformed fields raise MalformedParameterError naming the
      dotted field path, never KeyError/TypeError

Design Decisions:
    - Input validated by the StatsResults pydantic model, so every shape
      check lives in one schema rather than scattered .get() calls
"""

import math
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from opal_tools.core.errors import MalformedParameterError
from opal_tools.core.parse_params import parse_json_object
from opal_tools.schemas.report import (
    MetricSummary, MetricVariation, VariationSummary,
)
from opal_tools.schemas.stats_results import MetricResult, Reach, StatsResults

NO_LIFT = "N/A"
BASELINE_DESCRIPTION = "Original experience (Control)"
TREATMENT_DESCRIPTION = "Treatment variation"

_MS_PER_DAY = 86_400_000


def describe_validation_error(exc: ValidationError, prefix: str) -> tuple[str, str]:
    """(first dotted field path, '; '-joined summary) for a pydantic error."""
    parts = []
    first_path = prefix
    for i, err in enumerate(exc.errors()):
        path = ".".join(str(loc) for loc in (prefix, *err["loc"]))
        if i == 0:
            first_path = path
        parts.append(f"{path}: {err['msg']}")
    return first_path, "; ".join(parts)


def parse_stats_results(raw: Any, field: str = "results") -> StatsResults:
    """Decode and validate a Stats API results payload."""
    data = parse_json_object(raw, field)
    try:
        return StatsResults.model_validate(data)
    except ValidationError as e:
        path, summary = describe_validation_error(e, field)
        raise MalformedParameterError(
            f"Invalid {field}: {summary}", path, raw,
        )


def format_date(value: datetime) -> str:
    """'Jan 5, 2024' style (no zero padding on the day)."""
    return f"{value:%b} {value.day}, {value.year}"


def duration_days(start: datetime, end: datetime) -> int:
    elapsed_ms = (end - start).total_seconds() * 1000
    return math.ceil(elapsed_ms / _MS_PER_DAY)


def format_lift(best: float | None) -> str:
    if best is None or best <= 0:
        return NO_LIFT
    return f"+{best * 100:.1f}%"


def transform_metric(metric: MetricResult) -> MetricSummary:
    variations = []
    lifts = []
    for result in metric.results.values():
        significance = 0.0
        if result.lift is not None:
            significance = result.lift.significance * 100
            lifts.append(result.lift.value)
        variations.append(MetricVariation(
            name=result.name,
            value=result.rate * 100,
            significance=significance,
        ))
    best = max(lifts) if lifts else None
    return MetricSummary(
        name=metric.name, lift=format_lift(best), variations=variations,
    )


def transform_variations(reach: Reach) -> list[VariationSummary]:
    return [
        VariationSummary(
            name=variation.name,
            sample_size=variation.count,
            description=(
                BASELINE_DESCRIPTION if variation.is_baseline
                else TREATMENT_DESCRIPTION
            ),
        )
        for variation in reach.variations.values()
    ]


def transform_results(results: StatsResults) -> dict[str, Any]:
    """Report fields derived from the results (keyword names match ExperimentReport)."""
    if results.end_time < results.start_time:
        raise MalformedParameterError(
            f"Invalid results: end_time ({results.end_time.isoformat()}) is "
            f"before start_time ({results.start_time.isoformat()})",
            "results.end_time", results.end_time.isoformat(),
        )
    days = duration_days(results.start_time, results.end_time)
    return {
        "experiment_id": str(results.experiment_id),
        "date_range": (
            f"{format_date(results.start_time)} - {format_date(results.end_time)}"
        ),
        "duration": f"{days} days",
        "sample_size": results.reach.total_count,
        "confidence_level": results.stats_config.confidence_level * 100,
        "metrics": [transform_metric(m) for m in results.metrics],
        "variations": transform_variations(results.reach),
    }
