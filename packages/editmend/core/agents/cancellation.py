"""Composite cancellation for bounded LLM calls.

Merges caller cancellation events and an internal deadline into one
``asyncio.Event`` that downstream calls can observe.
"""

from __future__ import annotations

import asyncio
from enum import Enum
import logging
from types import TracebackType

logger = logging.getLogger(__name__)


class CancelReason(str, Enum):
    """Which source fired a composite token."""

    CALLER = "caller"
    TIMEOUT = "timeout"


class CompositeCancelToken:
    """Cancellation token that fires when any source fires or a deadline passes.

    Use as an async context manager. Entering starts one watcher task per
    source plus an optional timer; exiting stops them. The first source to
    fire decides ``reason`` and later firings are ignored.

    A source that is already set on entry fires the token immediately and
    no watcher or timer is started.

    Example:
        >>> async with CompositeCancelToken(caller_event, timeout_s=40.0) as token:
        ...     await provider.generate_json_async(..., cancel_token=token.event)
        ...     if token.is_cancelled():
        ...         print(token.reason)
    """

    def __init__(
        self,
        *sources: asyncio.Event | None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize composite token.

        Args:
            *sources: Caller cancellation events (None entries are ignored)
            timeout_s: Deadline in seconds after entering the context (None = no deadline)
        """
        self._sources = [source for source in sources if source is not None]
        self._timeout_s = timeout_s
        self._event = asyncio.Event()
        self._reason: CancelReason | None = None
        self._watchers: list[asyncio.Task[None]] = []

    @property
    def event(self) -> asyncio.Event:
        """Merged event, set once any source fires."""
        return self._event

    @property
    def reason(self) -> CancelReason | None:
        """Reason of the first firing, None while not cancelled."""
        return self._reason

    def is_cancelled(self) -> bool:
        """Check if the token has fired."""
        return self._event.is_set()

    async def wait(self) -> CancelReason | None:
        """Wait until the token fires and return the reason."""
        await self._event.wait()
        return self._reason

    def _fire(self, reason: CancelReason) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        logger.debug(f"Composite cancel token fired: {reason.value}")

    async def _watch(self, source: asyncio.Event) -> None:
        await source.wait()
        self._fire(CancelReason.CALLER)

    async def _expire(self, timeout_s: float) -> None:
        await asyncio.sleep(timeout_s)
        self._fire(CancelReason.TIMEOUT)

    async def __aenter__(self) -> CompositeCancelToken:
        if any(source.is_set() for source in self._sources):
            self._fire(CancelReason.CALLER)
            return self

        for source in self._sources:
            self._watchers.append(asyncio.create_task(self._watch(source)))

        if self._timeout_s is not None:
            self._watchers.append(asyncio.create_task(self._expire(self._timeout_s)))

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        for watcher in self._watchers:
            watcher.cancel()
        await asyncio.gather(*self._watchers, return_exceptions=True)
        self._watchers.clear()
