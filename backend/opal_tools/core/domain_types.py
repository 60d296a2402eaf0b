"""Domain Types: enums for the Optimizely vocabulary the tools speak.

Invariants:
    - All valid vendor values encoded as Enums (no raw string matching in handlers)
    - str Enums: serialize to JSON request bodies without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", int)
ExperimentId = NewType("ExperimentId", int)
AccountId = NewType("AccountId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ExperimentStatus(str, Enum):
    """Experiment lifecycle states accepted by the Optimizely API."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    ARCHIVED = "archived"


class ExperimentType(str, Enum):
    """Experiment kinds accepted by the Optimizely API."""
    AB = "a/b"
    MULTIVARIATE = "multivariate"
    MULTIPAGE = "multipage"


class MetricAggregator(str, Enum):
    UNIQUE = "unique"
    COUNT = "count"
    SUM = "sum"
    BOUNCE = "bounce"
    EXIT = "exit"
    RATIO = "ratio"


class MetricScope(str, Enum):
    SESSION = "session"
    VISITOR = "visitor"
    EVENT = "event"


class EventType(str, Enum):
    CUSTOM = "custom"
    CLICK = "click"
    PAGEVIEW = "pageview"


class WinningDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"


class ParameterType(str, Enum):
    """Parameter types understood by Opal tool discovery."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    LIST = "list"
    DICTIONARY = "object"


class ToolCategory(str, Enum):
    """Tool groupings for registry and observability."""
    EXPERIMENTS = "experiments"
    EVENTS = "events"
    REPORTS = "reports"
