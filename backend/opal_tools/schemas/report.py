"""Report Schemas: the Experiment Report Payload sent to the report service.

Invariants:
    - Serialized with camelCase keys (model_dump(by_alias=True))
    - value/significance/confidenceLevel are percentages (0-100)
    - Numbers are finite (NaN and infinity are rejected)
    - lift is a preformatted string ("+X.X%" or "N/A")
    - Built fresh per request, never persisted
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False,
    )


class MetricVariation(_CamelModel):
    name: str
    value: float
    significance: float = 0


class MetricSummary(_CamelModel):
    name: str
    lift: str
    variations: list[MetricVariation] = Field(default_factory=list)


class VariationSummary(_CamelModel):
    name: str
    sample_size: int
    description: str = ""


class Recommendation(_CamelModel):
    status: str
    title: str
    description: str


class ExperimentReport(_CamelModel):
    """Experiment Report Payload (the `experimentData` the report service renders)."""
    experiment_id: str
    experiment_name: str
    hypothesis: str = ""
    duration: str
    date_range: str
    sample_size: int
    confidence_level: float
    metrics: list[MetricSummary]
    variations: list[VariationSummary]
    recommendation: Recommendation
    actions: list[str]

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
