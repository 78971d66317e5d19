"""
Socket Transport

Last-resort strategy using ``http.client`` directly. Plain and TLS
schemes take separate connection classes; the body is accumulated chunk
by chunk until the stream ends. Redirects are not followed.
"""

import asyncio
import http.client
import logging
import socket
import ssl
from typing import Mapping, Optional
from urllib.parse import urlsplit

from welstory.core.exceptions import TransportError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class SocketTransport(BaseTransport):
    """Transport built on ``http.client`` connections."""

    @property
    def name(self) -> str:
        return "socket"

    def _connect(self, scheme: str, host: str, port: Optional[int]) -> http.client.HTTPConnection:
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if scheme == "https":
            return http.client.HTTPSConnection(
                host, port, context=ssl.create_default_context(), **kwargs
            )
        if scheme == "http":
            return http.client.HTTPConnection(host, port, **kwargs)
        raise TransportError(f"Unsupported URL scheme: {scheme!r}")

    def _send_blocking(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Optional[str],
    ) -> HttpResponse:
        parts = urlsplit(url)
        if not parts.hostname:
            raise TransportError(f"Invalid URL: {url!r}")
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        conn = self._connect(parts.scheme, parts.hostname, parts.port)
        try:
            conn.request(
                method,
                path,
                body=body.encode("utf-8") if body is not None else None,
                headers=dict(headers),
            )
            raw = conn.getresponse()

            chunks = []
            while True:
                chunk = raw.read(CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)

            return HttpResponse(
                status=raw.status,
                status_text=raw.reason or "",
                headers=ResponseHeaders(raw.getheaders()),
                content=b"".join(chunks),
                url=url,
            )
        except (socket.timeout, TimeoutError) as e:
            raise TransportError(f"Network request timed out: {url}") from e
        except (OSError, http.client.HTTPException) as e:
            raise TransportError(f"Network request failed: {e}") from e
        finally:
            conn.close()

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
