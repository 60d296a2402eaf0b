"""Report Defaults: recommendation and follow-up actions used when the caller omits them.

Invariants:
    - Each recommendation field defaults independently
    - Actions parsed by parse_json_or_csv_list; absent -> DEFAULT_ACTIONS (fresh list)
"""

from collections.abc import Mapping
from typing import Any

from opal_tools.core.parse_params import is_absent, parse_json_or_csv_list

DEFAULT_RECOMMENDATION_STATUS = "Pending Review"
DEFAULT_RECOMMENDATION_TITLE = "Review experiment results"
DEFAULT_RECOMMENDATION_DESCRIPTION = (
    "Review the metric results and variation performance to decide on next steps."
)

DEFAULT_ACTIONS = (
    "Review results with stakeholders",
    "Decide whether to roll out the winning variation",
    "Plan a follow-up experiment",
)


def _text_or(value: Any, default: str) -> str:
    return default if is_absent(value) else str(value)


def build_recommendation(params: Mapping[str, Any]) -> dict[str, str]:
    return {
        "status": _text_or(
            params.get("recommendationStatus"), DEFAULT_RECOMMENDATION_STATUS,
        ),
        "title": _text_or(
            params.get("recommendationTitle"), DEFAULT_RECOMMENDATION_TITLE,
        ),
        "description": _text_or(
            params.get("recommendationDescription"),
            DEFAULT_RECOMMENDATION_DESCRIPTION,
        ),
    }


def resolve_actions(raw: Any) -> list[str]:
    if is_absent(raw):
        return list(DEFAULT_ACTIONS)
    return parse_json_or_csv_list(raw, "actions")
