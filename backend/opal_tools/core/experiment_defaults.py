"""Experiment Defaults: request-body building blocks for experiment create/update.

Invariants:
    - Defaults apply only when the caller left the field absent
    - DEFAULT_ACCOUNT_ID is the single source of the account id literal;
      callers receive it through Settings.optimizely_account_id
    - Returned structures are fresh copies (callers may mutate them)
"""

import json
from typing import Any

from opal_tools.core.domain_types import (
    ExperimentStatus, ExperimentType, MetricAggregator, MetricScope,
    EventType, WinningDirection,
)
from opal_tools.core.errors import MalformedParameterError
from opal_tools.core.parse_params import is_absent

DEFAULT_ACCOUNT_ID = 22816830226

DEFAULT_EXPERIMENT_STATUS = ExperimentStatus.NOT_STARTED.value
DEFAULT_EXPERIMENT_TYPE = ExperimentType.AB.value

# Weights are basis points: 5000 + 5000 = 100%.
_DEFAULT_VARIATION_NAMES = ("Original", "Variation #1")
_DEFAULT_VARIATION_WEIGHT = 5000

_METRIC_DEFAULTS = {
    "aggregator": MetricAggregator.UNIQUE.value,
    "event_type": EventType.CUSTOM.value,
    "scope": MetricScope.VISITOR.value,
    "winning_direction": WinningDirection.INCREASING.value,
}


def default_variations() -> list[dict[str, Any]]:
    """Control plus one treatment with a 50/50 traffic split."""
    return [
        {
            "name": name,
            "weight": _DEFAULT_VARIATION_WEIGHT,
            "totalTraffic": 50,
            "percentage": 50,
            "actions": [],
        }
        for name in _DEFAULT_VARIATION_NAMES
    ]


def build_url_targeting(edit_url: str) -> dict[str, Any]:
    """URL targeting block matching the experiment to a single page URL.

    Optimizely expects `conditions` as a JSON-encoded string, not a nested object.
    """
    conditions = json.dumps([
        "and",
        [
            "or",
            {"match_type": "simple", "type": "url", "value": edit_url},
        ],
    ])
    return {
        "edit_url": edit_url,
        "activation_type": "immediate",
        "deactivation_enabled": False,
        "conditions": conditions,
    }


def apply_metric_defaults(
    metric: Any, account_id: int, index: int = 0,
) -> dict[str, Any]:
    """Fill aggregator/event_type/scope/winning_direction/account_id when absent."""
    if not isinstance(metric, dict):
        raise MalformedParameterError(
            f"Invalid metrics JSON: item {index} must be an object, got "
            f"{type(metric).__name__}",
            f"metrics[{index}]", metric,
        )
    result = dict(metric)
    for key, value in _METRIC_DEFAULTS.items():
        if is_absent(result.get(key)):
            result[key] = value
    if is_absent(result.get("account_id")):
        result["account_id"] = account_id
    return result
