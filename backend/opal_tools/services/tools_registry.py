"""Tools Registry: flat list, per-category filtering and the Opal discovery manifest.

Invariants:
    - Tool names are unique across ALL_TOOLS
    - Every tool is served at POST /tools/{name}
    - Discovery output is metadata only; nothing here is called at invocation time

Design Decisions:
    - Explicit imports from each define_*_tools.py: no auto-discovery
"""

from opal_tools.core.domain_types import ToolCategory
from opal_tools.services.define_experiment_tools import TOOLS_EXPERIMENTS
from opal_tools.services.define_event_tools import TOOLS_EVENTS
from opal_tools.services.define_report_tools import TOOLS_REPORTS

TOOL_ENDPOINT_PREFIX = "/tools"

_CATEGORY_TOOLS = {
    ToolCategory.EXPERIMENTS: TOOLS_EXPERIMENTS,
    ToolCategory.EVENTS: TOOLS_EVENTS,
    ToolCategory.REPORTS: TOOLS_REPORTS,
}

ALL_TOOLS: list[dict] = [
    *TOOLS_EXPERIMENTS,      # 2 tools
    *TOOLS_EVENTS,           # 1 tool
    *TOOLS_REPORTS,          # 2 tools
]


def get_category_tools(category: ToolCategory) -> list[dict]:
    return list(_CATEGORY_TOOLS[category])


def tool_endpoint(tool_name: str) -> str:
    return f"{TOOL_ENDPOINT_PREFIX}/{tool_name}"


def to_discovery_entry(tool: dict) -> dict:
    """One `functions[]` entry of the Opal discovery document."""
    return {
        "name": tool["name"],
        "description": tool["description"],
        "parameters": [dict(p) for p in tool["parameters"]],
        "endpoint": tool_endpoint(tool["name"]),
        "http_method": "POST",
        "auth_requirements": [dict(a) for a in tool["auth_requirements"]],
    }


def build_discovery_manifest(category: ToolCategory | None = None) -> dict:
    tools = ALL_TOOLS if category is None else get_category_tools(category)
    return {"functions": [to_discovery_entry(t) for t in tools]}
