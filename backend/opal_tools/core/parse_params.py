"""Parameter Parsing: pure conversions for the serialized strings Opal sends.

Invariants:
    - A value counts as absent when it is None or a blank string
    - JSON-or-CSV input starting with "[" is parsed as JSON; a parse failure raises,
      it never falls back to comma splitting
    - Integer identifiers are strict ASCII base-10: "12abc" and "1_000" are rejected
    - Numbers must be finite: "nan" and "inf" are rejected
    - List items must be strings or numbers; null and nested values are rejected
    - Every failure raises MalformedParameterError naming the field and the raw value

Design Decisions:
    - One parser per input convention, shared by every tool handler
"""

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from opal_tools.core.errors import MalformedParameterError, MissingParameterError

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_absent(value: Any) -> bool:
    """True for None and blank strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(params: Mapping[str, Any], names: list[str]) -> None:
    """Raise MissingParameterError listing every absent required field."""
    missing = [name for name in names if is_absent(params.get(name))]
    if missing:
        raise MissingParameterError(missing)


def parse_json_value(raw: Any, field: str) -> Any:
    """Decode a JSON string; already-decoded values pass through unchanged."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedParameterError(
            f"Invalid {field} JSON: {e} (value: {raw!r})", field, raw,
        )


def parse_json_array(raw: Any, field: str) -> list:
    """Decode a JSON array string (or accept a list as-is)."""
    value = parse_json_value(raw, field)
    if not isinstance(value, list):
        raise MalformedParameterError(
            f"Invalid {field} JSON: expected an array, got "
            f"{type(value).__name__} (value: {raw!r})",
            field, raw,
        )
    return value


def parse_json_object(raw: Any, field: str) -> dict:
    """Decode a JSON object string (or accept a dict as-is)."""
    value = parse_json_value(raw, field)
    if not isinstance(value, dict):
        raise MalformedParameterError(
            f"Invalid {field} JSON: expected an object, got "
            f"{type(value).__name__} (value: {raw!r})",
            field, raw,
        )
    return value


def _string_items(items: list, field: str) -> list[str]:
    """Strings kept as-is, numbers stringified; anything else is malformed."""
    result = []
    for i, item in enumerate(items):
        if isinstance(item, str):
            result.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            result.append(str(item))
        else:
            raise MalformedParameterError(
                f"Invalid {field} item {i}: expected a string, got "
                f"{type(item).__name__} (value: {item!r})",
                f"{field}[{i}]", item,
            )
    return result


def parse_json_or_csv_list(raw: Any, field: str) -> list[str]:
    """Parse a JSON array string, or split a comma-separated string.

    >>> parse_json_or_csv_list("A, B, C", "actions")
    ['A', 'B', 'C']
    >>> parse_json_or_csv_list('["A","B"]', "actions")
    ['A', 'B']
    """
    if isinstance(raw, list):
        return _string_items(raw, field)
    if not isinstance(raw, str):
        raise MalformedParameterError(
            f"Invalid {field} format: expected a JSON array or comma-separated "
            f"string (value: {raw!r})",
            field, raw,
        )
    text = raw.strip()
    if text.startswith("["):
        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedParameterError(
                f"Invalid {field} format: {e} (value: {raw!r})", field, raw,
            )
        if not isinstance(value, list):
            raise MalformedParameterError(
                f"Invalid {field} format: expected an array (value: {raw!r})",
                field, raw,
            )
        return _string_items(value, field)
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_int_id(raw: Any, field: str) -> int:
    """Parse a numeric identifier into an int, rejecting anything non-integral."""
    if isinstance(raw, bool):
        raise MalformedParameterError(
            f'Invalid {field}: "{raw}". Must be a valid integer.', field, raw,
        )
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    text = str(raw).strip()
    if not _INT_PATTERN.fullmatch(text):
        raise MalformedParameterError(
            f'Invalid {field}: "{raw}". Must be a valid integer.', field, raw,
        )
    return int(text, 10)


def parse_bool_flag(raw: Any, field: str, default: bool = False) -> bool:
    """Parse a boolean flag sent either as a JSON bool or a string."""
    if is_absent(raw):
        return default
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise MalformedParameterError(
        f'Invalid {field}: "{raw}". Must be true or false.', field, raw,
    )


def parse_number(raw: Any, field: str) -> float:
    """Parse a numeric parameter sent as a number or numeric string."""
    if isinstance(raw, bool):
        raise MalformedParameterError(
            f'Invalid {field}: "{raw}". Must be a number.', field, raw,
        )
    if isinstance(raw, (int, float)):
        value = raw
    else:
        try:
            value = float(str(raw).strip())
        except ValueError:
            raise MalformedParameterError(
                f'Invalid {field}: "{raw}". Must be a number.', field, raw,
            )
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedParameterError(
            f'Invalid {field}: "{raw}". Must be a finite number.', field, raw,
        )
    return value
