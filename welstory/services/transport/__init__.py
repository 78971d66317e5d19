"""
Transport Factory

Provides a single entry point for obtaining the process-wide transport.
The strategy is resolved once and cached, so behavior stays deterministic
for the lifetime of the process. Clients may also be given a transport
explicitly, which bypasses this factory entirely.

Fallback order (TransportMode.AUTO):
    1. httpx     - native async client
    2. requests  - blocking library on a worker thread
    3. urllib    - callback-driven request on a worker thread
    4. socket    - raw http.client connection

Usage:
    from welstory.services.transport import get_transport

    transport = get_transport()
    response = await transport.send("https://welplus.welstory.com/session")
"""

import importlib
import importlib.util
import logging
from functools import lru_cache
from typing import Optional

from welstory.core.config import TransportMode, get_settings
from welstory.core.exceptions import TransportUnavailableError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)
from welstory.services.transport.mock import MockTransport, RecordedRequest

logger = logging.getLogger(__name__)

# mode -> (primitive module probed, transport module, transport class)
STRATEGIES = {
    TransportMode.HTTPX: ("httpx", "welstory.services.transport.httpx_transport", "HttpxTransport"),
    TransportMode.REQUESTS: ("requests", "welstory.services.transport.requests_transport", "RequestsTransport"),
    TransportMode.URLLIB: ("urllib.request", "welstory.services.transport.urllib_transport", "UrllibTransport"),
    TransportMode.SOCKET: ("http.client", "welstory.services.transport.socket_transport", "SocketTransport"),
}

FALLBACK_ORDER = [
    TransportMode.HTTPX,
    TransportMode.REQUESTS,
    TransportMode.URLLIB,
    TransportMode.SOCKET,
]


def _primitive_available(module_name: str) -> bool:
    try:
        return importlib.util.find_spec(module_name) is not None
    except ModuleNotFoundError:
        # Parent package missing
        return False


def create_transport(
    mode: TransportMode = TransportMode.AUTO,
    timeout: Optional[float] = None,
) -> BaseTransport:
    """
    Build a new transport for the given mode.

    Args:
        mode: Strategy to use, AUTO probes the fallback chain
        timeout: Per-request timeout in seconds

    Returns:
        BaseTransport: Fresh transport instance

    Raises:
        TransportUnavailableError: If no (or not the requested) primitive exists
    """
    candidates = FALLBACK_ORDER if mode == TransportMode.AUTO else [mode]

    for candidate in candidates:
        primitive, module_name, class_name = STRATEGIES[candidate]
        if not _primitive_available(primitive):
            logger.debug(f"Transport: {candidate.value} unavailable, skipping")
            continue
        module = importlib.import_module(module_name)
        transport_cls = getattr(module, class_name)
        logger.info(f"Transport: Using {class_name}")
        return transport_cls(timeout=timeout)

    wanted = ", ".join(c.value for c in candidates)
    raise TransportUnavailableError(
        f"No HTTP client available (tried: {wanted})",
        details={"mode": mode.value},
    )


@lru_cache()
def get_transport() -> BaseTransport:
    """
    Get the process-wide transport instance.

    Uses the TRANSPORT and REQUEST_TIMEOUT settings. The choice is made
    on the first call and reused afterwards.

    Returns:
        BaseTransport: Shared transport instance
    """
    settings = get_settings()
    return create_transport(settings.transport, settings.request_timeout)


def reset_transport() -> None:
    """
    Clear the cached transport instance.

    Useful for testing or when configuration changes at runtime. The old
    instance is not closed.
    """
    get_transport.cache_clear()
    logger.debug("Transport cache cleared")


__all__ = [
    "get_transport",
    "reset_transport",
    "create_transport",
    "BaseTransport",
    "HttpResponse",
    "ResponseHeaders",
    "MockTransport",
    "RecordedRequest",
]
