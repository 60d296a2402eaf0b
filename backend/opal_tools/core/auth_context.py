"""Auth Context: normalization of the auth payload Opal attaches to tool calls.

Invariants:
    - Access token only ever read from auth.credentials.access_token
    - Project id resolution order: explicit parameter, auth.context.project_id,
      auth.project_id, auth.projectId; first non-empty value wins
    - Helpers never return or log the token itself beyond extract_access_token

Design Decisions:
    - The vendor spells the project id several ways; that concern is isolated in
      resolve_project_id so handlers see one optional value
"""

from collections.abc import Mapping
from typing import Any

from opal_tools.core.errors import AuthenticationRequiredError
from opal_tools.core.parse_params import is_absent


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def extract_access_token(auth: Mapping[str, Any] | None) -> str:
    """Return the bearer token or raise AuthenticationRequiredError."""
    credentials = _as_mapping(_as_mapping(auth).get("credentials"))
    token = credentials.get("access_token")
    if is_absent(token):
        raise AuthenticationRequiredError()
    return str(token)


def resolve_project_id(
    explicit: Any, auth: Mapping[str, Any] | None,
) -> Any | None:
    """Return the first non-empty project id candidate, or None."""
    auth = _as_mapping(auth)
    candidates = (
        explicit,
        _as_mapping(auth.get("context")).get("project_id"),
        auth.get("project_id"),
        auth.get("projectId"),
    )
    for candidate in candidates:
        if not is_absent(candidate):
            return candidate
    return None


def describe_auth(auth: Mapping[str, Any] | None) -> dict[str, list[str]]:
    """Key names present in the auth payload (values omitted) for diagnostics."""
    auth = _as_mapping(auth)
    return {
        "auth_keys": sorted(auth.keys()),
        "context_keys": sorted(_as_mapping(auth.get("context")).keys()),
    }
