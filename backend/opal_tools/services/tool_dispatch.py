"""Tool Dispatch: explicit routing from tool_name to handler function.

Invariants:
    - Every tool->handler mapping is visible: no getattr magic, no auto-discovery
    - Unknown tools raise UnknownToolError before any handler runs
    - Handlers share one ToolHTTPClient and one Settings per dispatch
    - Every call logged with tool name and outcome (never parameters or tokens)

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Split handlers by capability: experiments, events, reports
"""

import logging

from opal_tools.config import Settings
from opal_tools.core.errors import OpalToolError, UnknownToolError
from opal_tools.infrastructure.http_client import ToolHTTPClient
from opal_tools.services.handle_events import EventHandlers
from opal_tools.services.handle_experiments import ExperimentHandlers
from opal_tools.services.handle_reports import ReportHandlers

logger = logging.getLogger(__name__)


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, http: ToolHTTPClient, settings: Settings):
        experiments = ExperimentHandlers(http, settings)
        events = EventHandlers(http, settings)
        reports = ReportHandlers(http, settings)

        # Adding a tool requires editing this dict and tools_registry.py
        self._handlers = {
            # Experiments (2 tools)
            "create_experiment": experiments.create_experiment,
            "update_experiment": experiments.update_experiment,

            # Events (1 tool)
            "list_events": events.list_events,

            # Reports (2 tools)
            "generate_experiment_report": reports.generate_experiment_report,
            "generate_experiment_report_manual": reports.generate_experiment_report_manual,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def execute(
        self, tool_name: str, parameters: dict, auth: dict | None = None,
    ) -> dict:
        """Route tool_name to handler. Returns the handler's result dict."""
        handler = self._handlers.get(tool_name)
        if not handler:
            logger.warning(
                f"Unknown tool requested: {tool_name}",
                extra={"tool_name": tool_name, "error_code": "UNKNOWN_TOOL"},
            )
            raise UnknownToolError(tool_name)
        try:
            result = await handler(parameters, auth)
        except OpalToolError as e:
            logger.error(
                f"Tool '{tool_name}' failed: {e.message}",
                extra={"tool_name": tool_name, "error_code": e.code},
            )
            raise
        logger.info(
            f"Tool '{tool_name}' succeeded", extra={"tool_name": tool_name},
        )
        return result
