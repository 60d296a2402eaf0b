"""Handler Helpers: shared plumbing for tool handlers (error wrapping, headers, ids).

Invariants:
    - Every exception escaping a decorated handler is a ToolExecutionError
      whose message starts with the tool's prefix
    - A ToolExecutionError raised inside a handler is never double-wrapped
    - Project id: resolved via core/auth_context.py, then parsed as a strict integer
"""

import functools
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from opal_tools.core.auth_context import describe_auth, resolve_project_id
from opal_tools.core.errors import (
    ErrorContext, MissingIdentifierError, OpalToolError, ToolExecutionError,
)
from opal_tools.core.parse_params import parse_int_id

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[dict]]


def wraps_tool_errors(prefix: str) -> Callable[[Handler], Handler]:
    """Re-raise any failure as ToolExecutionError("{prefix}: {cause}")."""
    def decorator(fn: Handler) -> Handler:
        tool_name = fn.__name__

        @functools.wraps(fn)
        async def wrapper(self, parameters: dict, auth: dict | None = None) -> dict:
            try:
                return await fn(self, parameters, auth)
            except ToolExecutionError:
                raise
            except Exception as e:
                error_code = e.code if isinstance(e, OpalToolError) else "INTERNAL_ERROR"
                logger.warning(
                    f"{tool_name} failed: {e}",
                    extra={"tool_name": tool_name, "error_code": error_code},
                )
                raise ToolExecutionError(
                    prefix, e, ErrorContext(tool_name=tool_name),
                ) from e

        return wrapper
    return decorator


def json_headers(access_token: str | None = None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def resolve_int_project_id(explicit: Any, auth: Mapping[str, Any] | None) -> int:
    """Project id from parameter or auth context, as an integer."""
    raw = resolve_project_id(explicit, auth)
    if raw is None:
        keys = describe_auth(auth)
        logger.info("No project_id in parameters or auth context", extra=keys)
        raise MissingIdentifierError("project_id", keys["auth_keys"])
    return parse_int_id(raw, "project_id")
