"""
httpx Transport

Primary strategy: a native async client. Used whenever httpx is
importable, which is the normal case since it is a declared dependency.
"""

import asyncio
import logging
from typing import Mapping, Optional

import httpx

from welstory.core.exceptions import TransportError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)

logger = logging.getLogger(__name__)


class HttpxTransport(BaseTransport):
    """
    Transport backed by a shared ``httpx.AsyncClient``.

    The client is created on first use and kept until aclose(), so
    consecutive calls reuse pooled connections. Pooled connections are
    bound to the event loop that opened them, so an owned client is
    rebuilt when send() runs on a different loop.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(timeout)
        self._client = client
        self._owns_client = client is None
        self._client_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def name(self) -> str:
        return "httpx"

    def _get_client(self) -> httpx.AsyncClient:
        loop = asyncio.get_running_loop()
        if self._client is not None and self._owns_client and self._client_loop is not loop:
            # Previous loop is gone, its connections cannot be reused or closed
            logger.debug("httpx client belongs to another event loop, rebuilding")
            self._client = None
        if self._client is None:
            self._client_loop = loop
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def send(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        client = self._get_client()
        try:
            response = await client.request(
                method,
                url,
                headers=dict(headers or {}),
                content=body.encode("utf-8") if body is not None else None,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Network request timed out: {url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Network request failed: {e}") from e

        return HttpResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=ResponseHeaders(response.headers.multi_items()),
            content=response.content,
            url=str(response.url),
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            self._client_loop = None
