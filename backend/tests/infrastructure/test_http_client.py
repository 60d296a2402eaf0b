"""Outbound HTTP Client: tests for body tagging and error mapping.

Tests cover:
    - JSON bodies tagged JsonBody; text bodies tagged TextBody
    - JSON-labeled body that fails to parse falls back to text
    - Non-2xx raises UpstreamHTTPError with status, reason and compact body
    - Transport failures raise TransportError; exactly one request per send
    - Manager lifecycle and the uninitialized dependency
"""

import httpx
import pytest

from opal_tools.core.errors import TransportError, UpstreamHTTPError
from opal_tools.infrastructure import http_client as http_module
from opal_tools.infrastructure.http_client import (
    HTTPClientManager, JsonBody, TextBody, close_http_client, get_http_client,
    init_http_client,
)

URL = "https://api.example.com/v2/things"


async def test_json_body_is_tagged_json(http_client, upstream):
    upstream.respond(json_body={"id": 1})
    result = await http_client.send("GET", URL, action="Failed to get things")
    assert result.body == JsonBody({"id": 1})
    assert result.value == {"id": 1}
    assert result.status_code == 200


async def test_text_body_is_tagged_text(http_client, upstream):
    upstream.respond(content="plain words", headers={"content-type": "text/plain"})
    result = await http_client.send("GET", URL, action="Failed to get things")
    assert result.body == TextBody("plain words")


async def test_json_labeled_garbage_falls_back_to_text(http_client, upstream):
    """Content-type alone does not make a body JSON."""
    upstream.respond(
        content="{not json", headers={"content-type": "application/json"},
    )
    result = await http_client.send("GET", URL, action="Failed to get things")
    assert isinstance(result.body, TextBody)
    assert result.value == "{not json"


async def test_request_carries_headers_params_and_json(http_client, upstream):
    await http_client.send(
        "POST", URL, action="Failed",
        headers={"Authorization": "Bearer t"},
        json_body={"a": 1}, params={"project_id": "5"},
    )
    request = upstream.last
    assert request.method == "POST"
    assert request.url.params["project_id"] == "5"
    assert request.headers["Authorization"] == "Bearer t"
    assert upstream.last_json() == {"a": 1}


async def test_non_success_raises_upstream_error(http_client, upstream):
    """Status, reason phrase and compact body are all in the message."""
    upstream.respond(status_code=400, json_body={"message": "name is too long"})
    with pytest.raises(UpstreamHTTPError) as exc_info:
        await http_client.send("POST", URL, action="Failed to create experiment")
    err = exc_info.value
    assert err.status_code == 400
    assert err.message == (
        'Failed to create experiment: 400 Bad Request. {"message":"name is too long"}'
    )
    assert len(upstream.requests) == 1


async def test_non_success_text_body_is_embedded_verbatim(http_client, upstream):
    upstream.respond(status_code=503, content="upstream down")
    with pytest.raises(UpstreamHTTPError) as exc_info:
        await http_client.send("GET", URL, action="Failed to list events")
    assert exc_info.value.message.endswith("503 Service Unavailable. upstream down")


async def test_transport_failure_raises_transport_error(http_client, upstream):
    """Connection failures are not retried."""
    upstream.fail_with(httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError) as exc_info:
        await http_client.send("GET", URL, action="Failed to list events")
    assert exc_info.value.url == URL
    assert "connection refused" in exc_info.value.message
    assert len(upstream.requests) == 1


async def test_manager_uses_injected_transport(upstream):
    manager = HTTPClientManager(5.0, transport=httpx.MockTransport(upstream.handler))
    try:
        result = await manager.tool_client().send("GET", URL, action="Failed")
        assert result.status_code == 200
    finally:
        await manager.close()
    assert manager.client.is_closed


async def test_get_http_client_requires_init(monkeypatch):
    monkeypatch.setattr(http_module, "http_manager", None)
    with pytest.raises(RuntimeError, match="HTTP client not initialized"):
        await anext(get_http_client())


async def test_init_and_close_singleton(monkeypatch, upstream):
    monkeypatch.setattr(http_module, "http_manager", None)
    init_http_client(5.0, transport=httpx.MockTransport(upstream.handler))
    client = await anext(get_http_client())
    result = await client.send("GET", URL, action="Failed")
    assert result.status_code == 200
    await close_http_client()
    assert http_module.http_manager is None
