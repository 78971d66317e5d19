"""
Transport Abstract Base Class

Defines the interface contract for all HTTP transport implementations.
Every strategy (httpx, requests, urllib, socket, mock) returns the same
HttpResponse structure, so the client behaves identically whichever
primitive served the request.

Design Pattern: Strategy Pattern
    - The client depends on BaseTransport only
    - A strategy is picked once per process or injected explicitly
    - Tests inject MockTransport

Version: 1.0.0
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from welstory.core.exceptions import ParseError

logger = logging.getLogger(__name__)

RawHeaders = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class ResponseHeaders:
    """
    Case-insensitive, read-only view of response headers.

    Names are stored lower-cased. Repeated headers are joined with
    ", " the same way fetch-style Headers objects do.
    """

    def __init__(self, raw: Optional[RawHeaders] = None):
        self._headers: dict[str, str] = {}
        if raw is None:
            return
        items = raw.items() if isinstance(raw, Mapping) else raw
        for name, value in items:
            key = name.strip().lower()
            if key in self._headers:
                self._headers[key] = f"{self._headers[key]}, {value}"
            else:
                self._headers[key] = value

    def get(self, name: str) -> Optional[str]:
        """Return the header value or None when absent."""
        return self._headers.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __iter__(self):
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def items(self):
        return self._headers.items()

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._headers!r})"


@dataclass
class HttpResponse:
    """
    Standardized HTTP response.

    The body is kept as raw bytes and only decoded when text() or
    json() is called.

    Attributes:
        status: HTTP status code
        status_text: Reason phrase (may be empty)
        headers: Case-insensitive header lookup
        content: Raw body bytes
        url: Final request URL
    """
    status: int
    status_text: str = ""
    headers: ResponseHeaders = field(default_factory=ResponseHeaders)
    content: bytes = b""
    url: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True iff status is in [200, 300)."""
        return 200 <= self.status < 300

    @property
    def encoding(self) -> str:
        content_type = self.headers.get("content-type") or ""
        for param in content_type.split(";")[1:]:
            key, _, value = param.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip('"')
        return "utf-8"

    def text(self) -> str:
        """Return the body as text."""
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Parse the body as JSON.

        Raises:
            ParseError: If the body is not valid JSON
        """
        body = self.text()
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Failed to parse JSON response: {e}",
                details={"status": self.status, "body": body[:500]},
            ) from e

    def to_dict(self) -> dict:
        """Convert to dictionary for debugging output."""
        return {
            "status": self.status,
            "status_text": self.status_text,
            "ok": self.ok,
            "headers": dict(self.headers.items()),
            "url": self.url,
        }


class BaseTransport(ABC):
    """
    Abstract base class for HTTP transports.

    All transport implementations must inherit from this class and
    implement ``name`` and ``send``.

    Example:
        >>> transport = get_transport()
        >>> response = await transport.send(
        ...     "https://welplus.welstory.com/session",
        ...     headers={"User-Agent": "Welplus"},
        ... )
        >>> response.ok
        True
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Per-request timeout in seconds, None for no timeout
        """
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of the strategy.

        Returns:
            str: Strategy name (e.g., "httpx", "mock")
        """
        pass

    @abstractmethod
    async def send(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        """
        Issue a single HTTP request.

        Args:
            url: Absolute URL
            method: HTTP method
            headers: Request headers
            body: Request body, already serialized

        Returns:
            HttpResponse: Normalized response (any status)

        Raises:
            TransportError: On connection failure or timeout
        """
        pass

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
        return None
