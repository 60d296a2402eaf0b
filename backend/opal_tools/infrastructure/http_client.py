"""Outbound HTTP Client: shared httpx.AsyncClient with response tagging and error mapping.

Invariants:
    - Exactly one request per send() call: no retry, no redirect-chasing beyond httpx defaults
    - Body tagged JsonBody when content-type contains application/json AND it parses,
      otherwise TextBody (a JSON-labeled body that fails to parse falls back to text)
    - Non-2xx responses raise UpstreamHTTPError(status, reason phrase, stringified body)
    - httpx.RequestError (DNS, TLS, connection reset, timeout) raises TransportError

Design Decisions:
    - Singleton http_manager initialized on startup: FastAPI lifespan manages lifecycle
    - Status code never used to guess the body shape; only content-type decides
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Literal

import httpx

from opal_tools.core.errors import TransportError, UpstreamHTTPError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonBody:
    value: Any
    kind: Literal["json"] = "json"


@dataclass(frozen=True)
class TextBody:
    value: str
    kind: Literal["text"] = "text"


ResponseBody = JsonBody | TextBody


@dataclass(frozen=True)
class HTTPResult:
    """Successful (2xx) response reduced to what the tools read."""
    status_code: int
    reason: str
    body: ResponseBody

    @property
    def value(self) -> Any:
        return self.body.value


def decode_body(response: httpx.Response) -> ResponseBody:
    """Tag the body by content-type, with a text fallback for unparsable JSON."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type.lower():
        try:
            return JsonBody(response.json())
        except ValueError:
            return TextBody(response.text)
    return TextBody(response.text)


def stringify_body(body: ResponseBody) -> str:
    if isinstance(body, TextBody):
        return body.value
    return json.dumps(body.value, separators=(",", ":"), ensure_ascii=False)


class ToolHTTPClient:
    """Sends one request and returns an HTTPResult or raises a typed error."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def send(
        self,
        method: str,
        url: str,
        *,
        action: str,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: dict[str, str] | None = None,
    ) -> HTTPResult:
        """`action` labels upstream failures, e.g. "Failed to create experiment"."""
        try:
            response = await self._client.request(
                method, url, headers=headers, json=json_body, params=params,
            )
        except httpx.RequestError as e:
            logger.error(
                f"Outbound {method} failed: {e!r}",
                extra={"method": method, "url": url},
            )
            raise TransportError(str(e) or type(e).__name__, url)

        body = decode_body(response)
        if not response.is_success:
            logger.warning(
                f"{action}: upstream returned {response.status_code}",
                extra={
                    "method": method, "url": url,
                    "status_code": response.status_code,
                },
            )
            raise UpstreamHTTPError(
                action, response.status_code, response.reason_phrase,
                stringify_body(body),
            )

        logger.info(
            f"Outbound {method} succeeded",
            extra={
                "method": method, "url": url,
                "status_code": response.status_code,
            },
        )
        return HTTPResult(response.status_code, response.reason_phrase, body)


class HTTPClientManager:
    """Owns the process-wide httpx.AsyncClient."""

    def __init__(
        self, timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds), transport=transport,
        )

    def tool_client(self) -> ToolHTTPClient:
        return ToolHTTPClient(self.client)

    async def close(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
http_manager: HTTPClientManager | None = None


def init_http_client(timeout_seconds: float = 30.0, **kwargs) -> HTTPClientManager:
    global http_manager
    http_manager = HTTPClientManager(timeout_seconds, **kwargs)
    return http_manager


async def close_http_client() -> None:
    global http_manager
    if http_manager is not None:
        await http_manager.close()
        http_manager = None


async def get_http_client() -> AsyncGenerator[ToolHTTPClient, None]:
    """FastAPI dependency for the outbound client."""
    if not http_manager:
        raise RuntimeError("HTTP client not initialized")
    yield http_manager.tool_client()
