"""Root conftest: shared fixtures for outbound HTTP mocking.

Invariants:
    - No test reaches the network: every ToolHTTPClient runs on httpx.MockTransport
    - FakeUpstream records every outbound request for assertions
"""

import json

import httpx
import pytest

from opal_tools.config import Settings
from opal_tools.infrastructure.http_client import ToolHTTPClient


class FakeUpstream:
    """Stands in for the remote APIs: records requests, replays one response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._status_code = 200
        self._json: object = {}
        self._content: bytes | None = None
        self._headers: dict[str, str] | None = None
        self._error: Exception | None = None

    def respond(
        self, status_code: int = 200, json_body: object = None,
        content: bytes | str | None = None, headers: dict | None = None,
    ) -> None:
        self._status_code = status_code
        self._json = {} if json_body is None else json_body
        self._content = content.encode() if isinstance(content, str) else content
        self._headers = headers

    def fail_with(self, error: Exception) -> None:
        self._error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._content is not None:
            return httpx.Response(
                self._status_code, content=self._content, headers=self._headers,
            )
        return httpx.Response(
            self._status_code, json=self._json, headers=self._headers,
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def http_client(upstream):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(upstream.handler),
    ) as client:
        yield ToolHTTPClient(client)


@pytest.fixture
def settings():
    return Settings(_env_file=None)
