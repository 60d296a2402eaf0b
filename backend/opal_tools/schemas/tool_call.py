"""Tool Call Schemas: the request body Opal posts to a tool endpoint.

Invariants:
    - parameters is always a dict (missing -> empty), values left untyped;
      each handler validates its own parameters
    - auth keeps every key Opal sends: the project id may live under
      several spellings and is normalized by core/auth_context.py
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthCredentials(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str | None = None


class AuthData(BaseModel):
    """Auth payload: {provider, credentials: {access_token}, context: {project_id}}."""
    model_config = ConfigDict(extra="allow")

    provider: str | None = None
    credentials: AuthCredentials | None = None
    context: dict[str, Any] | None = None


class ToolInvocation(BaseModel):
    """POST /tools/{tool_name} body."""
    parameters: dict[str, Any] = Field(default_factory=dict)
    auth: AuthData | None = None

    def auth_dict(self) -> dict[str, Any] | None:
        if self.auth is None:
            return None
        return self.auth.model_dump(exclude_none=True)
