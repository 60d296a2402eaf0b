"""Tools Registry tests: verify the catalogue and the Opal discovery manifest.

Tests cover:
    - ALL_TOOLS has 5 entries with unique names
    - Category filtering returns the right subsets
    - Discovery entries carry endpoint, http_method and auth requirements
    - Experiment/event tools require OptiID; report tools require none

Design Decisions:
    - Tool counts validated per category as integration-level contract
"""

import pytest

from opal_tools.core.domain_types import ParameterType, ToolCategory
from opal_tools.services.tools_registry import (
    ALL_TOOLS, build_discovery_manifest, get_category_tools, tool_endpoint,
)


def _names(tools: list[dict]) -> set[str]:
    return {t["name"] for t in tools}


def test_all_tools_has_five_unique_entries():
    """2 experiment + 1 event + 2 report tools."""
    names = [t["name"] for t in ALL_TOOLS]
    assert len(names) == 5
    assert len(set(names)) == 5


@pytest.mark.parametrize("category,expected", [
    (ToolCategory.EXPERIMENTS, {"create_experiment", "update_experiment"}),
    (ToolCategory.EVENTS, {"list_events"}),
    (ToolCategory.REPORTS, {
        "generate_experiment_report", "generate_experiment_report_manual",
    }),
])
def test_category_tools(category, expected):
    assert _names(get_category_tools(category)) == expected


def test_parameter_types_are_known_values():
    known = {t.value for t in ParameterType}
    for tool in ALL_TOOLS:
        for param in tool["parameters"]:
            assert param["type"] in known, (tool["name"], param["name"])
            assert isinstance(param["required"], bool)


def test_discovery_manifest_lists_every_tool():
    manifest = build_discovery_manifest()
    assert _names(manifest["functions"]) == _names(ALL_TOOLS)
    for entry in manifest["functions"]:
        assert entry["endpoint"] == tool_endpoint(entry["name"])
        assert entry["endpoint"].startswith("/tools/")
        assert entry["http_method"] == "POST"


def test_discovery_manifest_filters_by_category():
    manifest = build_discovery_manifest(ToolCategory.EVENTS)
    assert [f["name"] for f in manifest["functions"]] == ["list_events"]


def test_optimizely_tools_require_optiid():
    """Optimizely tools need OptiID; report tools need no auth."""
    manifest = build_discovery_manifest()
    by_name = {f["name"]: f for f in manifest["functions"]}
    for name in ("create_experiment", "update_experiment", "list_events"):
        (requirement,) = by_name[name]["auth_requirements"]
        assert requirement["provider"] == "OptiID"
        assert requirement["required"] is True
    assert by_name["generate_experiment_report"]["auth_requirements"] == []
    assert by_name["generate_experiment_report_manual"]["auth_requirements"] == []


def test_report_tool_required_parameters():
    (tool,) = [t for t in ALL_TOOLS if t["name"] == "generate_experiment_report"]
    required = {p["name"] for p in tool["parameters"] if p["required"]}
    assert required == {"recipientEmail", "results"}


def test_discovery_entries_are_copies():
    entry = build_discovery_manifest()["functions"][0]
    entry["parameters"].clear()
    assert build_discovery_manifest()["functions"][0]["parameters"]
