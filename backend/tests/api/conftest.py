"""API test fixtures: FastAPI app over ASGITransport with a mocked upstream.

Invariants:
    - get_http_client overridden so no test reaches the network
    - Overrides cleared after every test
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from opal_tools.infrastructure.http_client import ToolHTTPClient, get_http_client
from opal_tools.main import app


@pytest.fixture
async def client(upstream):
    upstream_client = httpx.AsyncClient(
        transport=httpx.MockTransport(upstream.handler),
    )

    async def override_get_http_client():
        yield ToolHTTPClient(upstream_client)

    app.dependency_overrides[get_http_client] = override_get_http_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await upstream_client.aclose()
