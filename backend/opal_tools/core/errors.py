"""Error Hierarchy: typed, categorized exceptions for every tool failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors are 400-level; upstream and transport errors are 500-level
    - Messages are English diagnostics that name the field, status or body involved
    - ToolExecutionError is the single type a tool invocation surfaces to its caller

Design Decisions:
    - Single hierarchy with OpalToolError base: the FastAPI global handler catches all
    - ErrorContext as dataclass: carries tool_name for logs without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    TRANSPORT = "transport"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tool_name: str | None = None
    debug_info: dict[str, Any] | None = None


class OpalToolError(Exception):
    """Base exception for all tool errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "tool_name": self.context.tool_name,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class MissingParameterError(OpalToolError):
    """One or more required parameters are absent."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        names = ", ".join(fields)
        verb = "is" if len(fields) == 1 else "are"
        super().__init__(
            f"{names} {verb} required",
            "MISSING_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields


class MalformedParameterError(OpalToolError):
    """A parameter is present but cannot be parsed into the expected shape."""
    def __init__(
        self, message: str, field: str, raw_value: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "MALFORMED_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.raw_value = raw_value


class AuthenticationRequiredError(OpalToolError):
    """No access token could be resolved from the auth context."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required. Please ensure OptiID authentication is configured.",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class MissingIdentifierError(OpalToolError):
    """No usable resource identifier after checking every fallback source."""
    def __init__(
        self, identifier: str, available_keys: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        message = (
            f"{identifier} is required. Either provide it as a parameter or "
            f"ensure it's available in the context when running from Optimizely."
        )
        if available_keys is not None:
            message += f" Available auth keys: {', '.join(available_keys) or 'none'}"
        super().__init__(
            message, "MISSING_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.identifier = identifier


class UnknownToolError(OpalToolError):
    """Requested tool is not registered."""
    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Tool '{tool_name}' does not exist.",
            "UNKNOWN_TOOL", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.tool_name = tool_name


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamHTTPError(OpalToolError):
    """Remote API answered with a non-success status."""
    def __init__(
        self,
        action: str,
        status_code: int,
        reason: str,
        body: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{action}: {status_code} {reason}. {body}",
            "UPSTREAM_HTTP_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.status_code = status_code
        self.reason = reason
        self.body = body


class UnexpectedResponseError(OpalToolError):
    """Remote API answered successfully but with an unusable body."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNEXPECTED_RESPONSE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )


class TransportError(OpalToolError):
    """Outbound call failed before a response arrived (DNS, TLS, reset, timeout)."""
    def __init__(self, message: str, url: str, context: ErrorContext | None = None):
        super().__init__(
            f"Request to {url} failed: {message}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.url = url


# ─── Invocation Wrapper ─────────────────────────────────────────

class ToolExecutionError(OpalToolError):
    """Any failure inside a tool, prefixed with the tool's action description."""
    def __init__(
        self, prefix: str, cause: Exception, context: ErrorContext | None = None,
    ):
        if isinstance(cause, OpalToolError):
            category = cause.category
            severity = cause.severity
            http_status = cause.http_status
        else:
            category = ErrorCategory.INTERNAL
            severity = ErrorSeverity.CRITICAL
            http_status = 500
        super().__init__(
            f"{prefix}: {cause}",
            "TOOL_EXECUTION_FAILED", category, severity, context, http_status,
        )
        self.cause = cause

    def to_response(self) -> dict:
        response = super().to_response()
        if isinstance(self.cause, OpalToolError):
            response["error"]["cause_code"] = self.cause.code
        return response
