"""
urllib Transport

Third strategy, for environments without httpx or requests. The request
is always issued asynchronously on a worker thread; the thread reports
back through one of three callbacks scheduled on the event loop:

    on_load     response received (any status)
    on_error    network failure
    on_timeout  request timed out

Both failure callbacks reject the pending operation with TransportError.
"""

import asyncio
import http.client
import logging
import socket
import urllib.error
import urllib.request
from typing import Callable, Mapping, Optional

from welstory.core.exceptions import TransportError
from welstory.services.transport.base import (
    BaseTransport,
    HttpResponse,
    ResponseHeaders,
)

logger = logging.getLogger(__name__)


class UrllibTransport(BaseTransport):
    """Callback-driven transport built on ``urllib.request``."""

    @property
    def name(self) -> str:
        return "urllib"

    def _open(self, request: urllib.request.Request):
        if self.timeout is None:
            return urllib.request.urlopen(request)
        return urllib.request.urlopen(request, timeout=self.timeout)

    def _run(
        self,
        request: urllib.request.Request,
        on_load: Callable[[HttpResponse], None],
        on_error: Callable[[BaseException], None],
        on_timeout: Callable[[BaseException], None],
    ) -> None:
        """Worker thread body. Exactly one callback fires."""
        try:
            try:
                with self._open(request) as raw:
                    response = HttpResponse(
                        status=raw.status,
                        status_text=raw.reason or "",
                        headers=ResponseHeaders(raw.headers.items()),
                        content=raw.read(),
                        url=raw.geturl(),
                    )
            except urllib.error.HTTPError as e:
                # Non-2xx statuses are still responses
                with e:
                    response = HttpResponse(
                        status=e.code,
                        status_text=str(e.reason or ""),
                        headers=ResponseHeaders(e.headers.items() if e.headers else None),
                        content=e.read(),
                        url=e.geturl(),
                    )
        except (socket.timeout, TimeoutError) as e:
            on_timeout(e)
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                on_timeout(e)
            else:
                on_error(e)
        except (ValueError, OSError, http.client.HTTPException) as e:
            on_error(e)
        else:
            on_load(response)

    async def send(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def settle(setter: Callable, value) -> None:
            if not future.done():
                setter(value)

        def on_load(response: HttpResponse) -> None:
            loop.call_soon_threadsafe(settle, future.set_result, response)

        def on_error(error: BaseException) -> None:
            exc = TransportError(f"Network request failed: {error}")
            exc.__cause__ = error
            loop.call_soon_threadsafe(settle, future.set_exception, exc)

        def on_timeout(error: BaseException) -> None:
            exc = TransportError(f"Network request timed out: {url}")
            exc.__cause__ = error
            loop.call_soon_threadsafe(settle, future.set_exception, exc)

        try:
            request = urllib.request.Request(
                url,
                data=body.encode("utf-8") if body is not None else None,
                headers=dict(headers or {}),
                method=method,
            )
        except ValueError as e:
            raise TransportError(f"Network request failed: {e}") from e

        def on_worker_done(worker: asyncio.Future) -> None:
            # Unexpected worker crash, no callback fired
            if worker.cancelled() or future.done():
                return
            if worker.exception() is not None:
                future.set_exception(worker.exception())

        worker = loop.run_in_executor(
            None, self._run, request, on_load, on_error, on_timeout
        )
        worker.add_done_callback(on_worker_done)
        return await future
