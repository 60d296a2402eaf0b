"""Tool Dispatch: tests for explicit tool routing.

Tests cover:
    - Every registry tool has a handler and vice versa
    - Unknown tools raise UnknownToolError before any outbound call
    - Known tools route to their handler and return its result
    - Handler failures propagate unchanged
"""

import pytest

from opal_tools.core.errors import ToolExecutionError, UnknownToolError
from opal_tools.services.tool_dispatch import ToolDispatch
from opal_tools.services.tools_registry import ALL_TOOLS

from tests.sample_payloads import AUTH


@pytest.fixture
def dispatch(http_client, settings):
    return ToolDispatch(http_client, settings)


def test_dispatch_covers_registry(dispatch):
    assert set(dispatch.tool_names) == {t["name"] for t in ALL_TOOLS}


async def test_unknown_tool_raises(dispatch, upstream):
    """Unknown names fail before any handler runs."""
    with pytest.raises(UnknownToolError) as exc_info:
        await dispatch.execute("nonexistent_tool", {}, AUTH)
    assert exc_info.value.code == "UNKNOWN_TOOL"
    assert upstream.requests == []


async def test_routes_to_list_events(dispatch, upstream):
    upstream.respond(json_body=[{"id": 1}])
    result = await dispatch.execute("list_events", {"project_id": "9"}, AUTH)
    assert result["count"] == 1
    assert upstream.last.url.params["project_id"] == "9"


async def test_routes_to_create_experiment(dispatch, upstream):
    upstream.respond(json_body={"id": 10})
    result = await dispatch.execute("create_experiment", {"name": "X"}, AUTH)
    assert result["experiment"] == {"id": 10}
    assert upstream.last.method == "POST"


async def test_handler_failure_propagates(dispatch):
    with pytest.raises(ToolExecutionError) as exc_info:
        await dispatch.execute("update_experiment", {}, None)
    assert exc_info.value.code == "TOOL_EXECUTION_FAILED"
    assert exc_info.value.context.tool_name == "update_experiment"
