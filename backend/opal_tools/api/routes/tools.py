"""Tool Invocation: POST /tools/{tool_name} routes an Opal call to its handler.

Invariants:
    - Body validated by ToolInvocation before dispatch
    - Route holds no tool logic; ToolDispatch owns routing and handlers own behavior
    - Failures propagate as OpalToolError to the global error handlers
"""

from fastapi import APIRouter, Depends

from opal_tools.config import Settings, get_settings
from opal_tools.infrastructure.http_client import ToolHTTPClient, get_http_client
from opal_tools.schemas.tool_call import ToolInvocation
from opal_tools.services.tool_dispatch import ToolDispatch

router = APIRouter(tags=["tools"])


def get_dispatch(
    http: ToolHTTPClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> ToolDispatch:
    return ToolDispatch(http, settings)


@router.post("/tools/{tool_name}")
async def invoke_tool(
    tool_name: str,
    body: ToolInvocation,
    dispatch: ToolDispatch = Depends(get_dispatch),
):
    """Run one tool and return its JSON result."""
    return await dispatch.execute(tool_name, body.parameters, body.auth_dict())
