"""Report Defaults: recommendation and actions fallbacks."""

from opal_tools.core.report_defaults import (
    DEFAULT_ACTIONS, DEFAULT_RECOMMENDATION_DESCRIPTION,
    DEFAULT_RECOMMENDATION_STATUS, DEFAULT_RECOMMENDATION_TITLE,
    build_recommendation, resolve_actions,
)


def test_recommendation_all_defaults():
    assert build_recommendation({}) == {
        "status": DEFAULT_RECOMMENDATION_STATUS,
        "title": DEFAULT_RECOMMENDATION_TITLE,
        "description": DEFAULT_RECOMMENDATION_DESCRIPTION,
    }


def test_recommendation_fields_default_independently():
    rec = build_recommendation({"recommendationTitle": "Ship variation B"})
    assert rec["title"] == "Ship variation B"
    assert rec["status"] == "Pending Review"


def test_actions_default_is_fresh_list():
    actions = resolve_actions(None)
    assert actions == list(DEFAULT_ACTIONS)
    actions.append("extra")
    assert resolve_actions("") == list(DEFAULT_ACTIONS)


def test_actions_from_csv_and_json():
    assert resolve_actions("Ship it, Monitor") == ["Ship it", "Monitor"]
    assert resolve_actions('["Ship it, now"]') == ["Ship it, now"]
