"""
Mock Transport Implementation

Serves scripted responses without touching the network. Used by the test
suite and handy for offline development against recorded payloads.

Behavior:
    - Responses are registered per (method, path); the query string is
      ignored when matching
    - Several responses for one route are served in order, the last one
      repeats
    - Every request is recorded with its final headers and body
    - Unrouted requests get a 404 with an empty JSON object

Version: 1.0.0
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union
from urllib.parse import parse_qs, urlsplit

from welstory.core.exceptions import TransportError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    200: "OK",
    201: "Created",
    204: "No Content",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal Server Error",
}


@dataclass
class RecordedRequest:
    """
    A request observed by MockTransport.

    Attributes:
        method: HTTP method
        url: Absolute URL as sent
        headers: Header mapping as sent (original casing)
        body: Serialized body or None
    """
    method: str
    url: str
    headers: dict = field(default_factory=dict)
    body: Optional[str] = None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.url).query, keep_blank_values=True)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    def json(self) -> Any:
        return json.loads(self.body) if self.body is not None else None


Scripted = Union[HttpResponse, BaseException]


class MockTransport(BaseTransport):
    """
    In-memory transport with scripted responses.

    Example:
        >>> transport = MockTransport()
        >>> transport.add_response("GET", "/session", json_body={"data": token})
        >>> client = WelstoryClient(transport=transport)
        >>> await client.refresh_session()
        >>> transport.requests[0].header("X-Device-Id")
    """

    def __init__(self, latency: float = 0.0):
        """
        Args:
            latency: Simulated delay in seconds before each response
        """
        super().__init__()
        self.latency = latency
        self.requests: list[RecordedRequest] = []
        self._routes: dict[tuple[str, str], list[Scripted]] = {}

    @property
    def name(self) -> str:
        return "mock"

    @staticmethod
    def make_response(
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        status_text: Optional[str] = None,
    ) -> HttpResponse:
        """Build an HttpResponse from a JSON-able body or raw text."""
        if text is None:
            text = json.dumps(json_body) if json_body is not None else ""
        return HttpResponse(
            status=status,
            status_text=status_text if status_text is not None else STATUS_TEXT.get(status, ""),
            headers=ResponseHeaders(headers),
            content=text.encode("utf-8"),
        )

    def add_response(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        status_text: Optional[str] = None,
    ) -> "MockTransport":
        """Queue a response for ``method path``."""
        response = self.make_response(status, json_body, text, headers, status_text)
        self._routes.setdefault((method.upper(), path), []).append(response)
        return self

    def add_error(
        self,
        method: str,
        path: str,
        error: Optional[BaseException] = None,
    ) -> "MockTransport":
        """Queue a transport failure for ``method path``."""
        error = error or TransportError(f"Mock: connection refused for {path}")
        self._routes.setdefault((method.upper(), path), []).append(error)
        return self

    def requests_to(self, path: str, method: Optional[str] = None) -> list[RecordedRequest]:
        """Recorded requests for a path, optionally filtered by method."""
        return [
            r for r in self.requests
            if r.path == path and (method is None or r.method == method.upper())
        ]

    async def send(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        request = RecordedRequest(
            method=method.upper(),
            url=url,
            headers=dict(headers or {}),
            body=body,
        )
        self.requests.append(request)
        logger.debug(f"Mock: {request.method} {url}")

        if self.latency:
            await asyncio.sleep(self.latency)

        queue = self._routes.get((request.method, request.path))
        if not queue:
            logger.debug(f"Mock: no route for {request.method} {request.path}")
            return self.make_response(404, json_body={})

        scripted = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(scripted, BaseException):
            raise scripted
        return HttpResponse(
            status=scripted.status,
            status_text=scripted.status_text,
            headers=scripted.headers,
            content=scripted.content,
            url=url,
        )
