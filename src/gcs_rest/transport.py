"""HTTP transport used by the storage client.

The client only depends on the ``HttpTransport`` protocol: four coroutine
methods taking ``(url, headers, body)`` and returning a
``TransportResponse``. ``HttpxTransport`` is the default implementation.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from gcs_rest.exceptions import GCSTransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_TEXT_TYPES = ("text/", "application/xml", "application/javascript", "+xml")


@dataclass(frozen=True)
class TransportResponse:
    """Status and decoded body of an HTTP response."""

    status: int
    data: Any = None


class HttpTransport(Protocol):
    """Minimal async HTTP interface consumed by StorageClient."""

    async def get(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse: ...

    async def post(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse: ...

    async def put(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse: ...

    async def patch(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse: ...

    async def aclose(self) -> None: ...


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body according to its content type.

    Args:
        response: The httpx response.

    Returns:
        Parsed JSON for JSON types, text for textual types, raw bytes
        otherwise, None for an empty body.
    """
    if not response.content:
        return None

    content_type = response.headers.get("content-type", "").lower()
    if "json" in content_type:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Response declared JSON but did not parse, returning text")
            return response.text
    if any(marker in content_type for marker in _TEXT_TYPES):
        return response.text
    return response.content


class HttpxTransport:
    """HttpTransport backed by ``httpx.AsyncClient``.

    Example:
        ```python
        async with HttpxTransport(timeout=10) as transport:
            response = await transport.get(url, {"Authorization": "Bearer ..."})
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Optional preconfigured client. When given, the caller
                owns it and ``aclose`` leaves it open.
            timeout: Request timeout in seconds for the internal client.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | bytes | None = None,
    ) -> TransportResponse:
        """Send a request and decode the response.

        Raises:
            GCSTransportError: If the request could not be completed.
        """
        content = body.encode("utf-8") if isinstance(body, str) else body
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method, url, headers=headers, content=content
            )
        except httpx.HTTPError as e:
            msg = f"{method} {url} failed: {e}"
            raise GCSTransportError(msg, method=method, url=url) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return TransportResponse(status=response.status_code, data=decode_body(response))

    async def get(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse:
        return await self.request("GET", url, headers, body)

    async def post(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse:
        return await self.request("POST", url, headers, body)

    async def put(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse:
        return await self.request("PUT", url, headers, body)

    async def patch(
        self, url: str, headers: dict[str, str], body: str | bytes | None = None
    ) -> TransportResponse:
        return await self.request("PATCH", url, headers, body)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        await self.aclose()
        return False
