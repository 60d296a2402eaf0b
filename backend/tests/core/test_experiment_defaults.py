"""Experiment Defaults: tests for variation, targeting and metric defaults.

Tests cover:
    - Two default variations with a 50/50 split, fresh on every call
    - url_targeting conditions is a JSON string with the simple url match
    - Metric defaults fill only absent fields; account_id added when missing
    - Non-object metrics raise MalformedParameterError
"""

import json

import pytest

from opal_tools.core.errors import MalformedParameterError
from opal_tools.core.experiment_defaults import (
    DEFAULT_ACCOUNT_ID, apply_metric_defaults, build_url_targeting,
    default_variations,
)


def test_default_variations_split_traffic_evenly():
    """Two variations at 5000 basis points each."""
    variations = default_variations()
    assert [v["name"] for v in variations] == ["Original", "Variation #1"]
    assert sum(v["weight"] for v in variations) == 10000
    for v in variations:
        assert v["totalTraffic"] == 50
        assert v["percentage"] == 50
        assert v["actions"] == []


def test_default_variations_are_fresh():
    first = default_variations()
    first[0]["actions"].append("mutated")
    assert default_variations()[0]["actions"] == []


def test_url_targeting_conditions_are_json_string():
    """conditions is serialized JSON, not a nested list."""
    targeting = build_url_targeting("https://example.com/landing")
    assert targeting["edit_url"] == "https://example.com/landing"
    assert targeting["activation_type"] == "immediate"
    assert targeting["deactivation_enabled"] is False
    assert isinstance(targeting["conditions"], str)
    assert json.loads(targeting["conditions"]) == [
        "and",
        ["or", {
            "match_type": "simple", "type": "url",
            "value": "https://example.com/landing",
        }],
    ]


def test_metric_defaults_fill_absent_fields():
    metric = apply_metric_defaults({"event_id": 555}, DEFAULT_ACCOUNT_ID)
    assert metric == {
        "event_id": 555,
        "aggregator": "unique",
        "event_type": "custom",
        "scope": "visitor",
        "winning_direction": "increasing",
        "account_id": 22816830226,
    }


def test_metric_defaults_keep_caller_values():
    """Defaults never override fields the caller set."""
    original = {"event_id": 1, "aggregator": "count", "account_id": 7}
    metric = apply_metric_defaults(original, DEFAULT_ACCOUNT_ID)
    assert metric["aggregator"] == "count"
    assert metric["account_id"] == 7
    assert "scope" not in original


@pytest.mark.parametrize("metric", ["clicks", 3, None, ["a"]])
def test_non_object_metric_is_rejected(metric):
    with pytest.raises(MalformedParameterError) as exc_info:
        apply_metric_defaults(metric, DEFAULT_ACCOUNT_ID, index=2)
    assert exc_info.value.field == "metrics[2]"
