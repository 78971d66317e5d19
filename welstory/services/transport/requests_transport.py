"""
requests Transport

Second strategy: the blocking requests library, run on a worker thread
so the client API stays async.
"""

import asyncio
import logging
from typing import Mapping, Optional

import requests

from welstory.core.exceptions import TransportError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)

logger = logging.getLogger(__name__)


class RequestsTransport(BaseTransport):
    """Transport backed by a ``requests.Session``."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(timeout)
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def name(self) -> str:
        return "requests"

    def _send_blocking(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Optional[str],
    ) -> HttpResponse:
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=body.encode("utf-8") if body is not None else None,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise TransportError(f"Network request timed out: {url}") from e
        except requests.RequestException as e:
            raise TransportError(f"Network request failed: {e}") from e

        return HttpResponse(
            status=response.status_code,
            status_text=response.reason or "",
            headers=ResponseHeaders(response.headers.items()),
            content=response.content,
            url=response.url,
        )

    async def send(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        return await asyncio.to_thread(
            self._send_blocking, url, method, headers or {}, body
        )

    async def aclose(self) -> None:
        if self._owns_session:
            self._session.close()
