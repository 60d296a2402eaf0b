"""Tool Discovery: the manifest Opal reads to learn tool names, parameters and auth.

Invariants:
    - GET /discovery returns {"functions": [...]} built from tools_registry
    - Optional ?category= narrows the manifest to one ToolCategory
"""

from fastapi import APIRouter, Query

from opal_tools.core.domain_types import ToolCategory
from opal_tools.services.tools_registry import build_discovery_manifest

router = APIRouter(tags=["discovery"])


@router.get("/discovery")
async def discovery(category: ToolCategory | None = Query(None)):
    """Opal tool discovery document."""
    return build_discovery_manifest(category)
