"""Structured Logging: one JSON object per line, tagged with the service name.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger,
      service and message
    - Only allowlisted extras are emitted; tokens and parameter values never are
    - setup_logging is idempotent: calling it again replaces its own handler
    - httpx/httpcore request logs are raised to WARNING; ToolHTTPClient logs
      outbound calls itself with method, url and status_code

Design Decisions:
    - Stdlib logging with a custom formatter: handlers log via extra={...}
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "tool_name", "error_code", "status_code", "method", "url",
    "project_id", "experiment_id", "auth_keys", "context_keys",
)

_QUIET_LOGGERS = ("httpx", "httpcore")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(tool_name)s]: %(message)s"


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str = "opal-optimizely-tools"):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key] for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _ToolNameDefault(logging.Filter):
    """Text format references %(tool_name)s; fill it for records without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "tool_name"):
            record.tool_name = "-"
        return True


class _OpalHandler(logging.StreamHandler):
    """Marker type so setup_logging can find and replace its own handler."""


def setup_logging(
    level: str = "INFO", fmt: str = "json",
    service: str = "opal-optimizely-tools",
) -> logging.Handler:
    handler = _OpalHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter(service))
    else:
        handler.addFilter(_ToolNameDefault())
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _OpalHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
