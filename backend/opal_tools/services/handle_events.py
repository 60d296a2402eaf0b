"""Event Handlers: list_events (1 method).

Invariants:
    - GET /events?project_id={id}, plus include_classic=true only when requested
    - count is len(events) when the body is a JSON array, else 0
"""

import logging

from opal_tools.config import Settings
from opal_tools.core.auth_context import extract_access_token
from opal_tools.core.parse_params import parse_bool_flag
from opal_tools.infrastructure.http_client import ToolHTTPClient
from opal_tools.services.handler_helpers import (
    json_headers, resolve_int_project_id, wraps_tool_errors,
)

logger = logging.getLogger(__name__)


class EventHandlers:
    def __init__(self, http: ToolHTTPClient, settings: Settings):
        self.http = http
        self.base_url = settings.optimizely_api_base_url

    @wraps_tool_errors("Failed to list Optimizely events")
    async def list_events(
        self, parameters: dict, auth: dict | None = None,
    ) -> dict:
        access_token = extract_access_token(auth)
        project_id = resolve_int_project_id(parameters.get("project_id"), auth)
        include_classic = parse_bool_flag(
            parameters.get("include_classic"), "include_classic",
        )

        query = {"project_id": str(project_id)}
        if include_classic:
            query["include_classic"] = "true"

        logger.info(
            "Listing events",
            extra={"tool_name": "list_events", "project_id": project_id},
        )
        result = await self.http.send(
            "GET", f"{self.base_url}/events",
            action="Failed to list events",
            headers=json_headers(access_token),
            params=query,
        )
        events = result.value
        count = len(events) if isinstance(events, list) else 0
        return {
            "success": True,
            "status": result.status_code,
            "events": events,
            "count": count,
            "message": (
                f"Successfully retrieved {count} events for project {project_id}"
            ),
        }
