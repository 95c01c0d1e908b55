"""
Network Idle Tracking
=====================

Playwright only offers a zero-connection ``networkidle`` condition. The
``networkidle2`` condition (no more than two requests in flight for the idle
window) is built here from the page's request events.
"""

import asyncio
from typing import Any, Optional, Set

from pagepdf.config.logging import get_logger

logger = get_logger(__name__)


class InflightRequestTracker:
    """Counts requests a page has started but not yet finished or failed."""

    def __init__(self) -> None:
        self._inflight: Set[Any] = set()
        self._changed = asyncio.Event()
        self.logger: Any = logger.bind(component="network_tracker")  # structlog.BoundLoggerBase

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def attach(self, page: Any) -> None:
        """Subscribe to a page's request lifecycle events."""
        page.on("request", self._on_request_started)
        page.on("requestfinished", self._on_request_done)
        page.on("requestfailed", self._on_request_done)

    def _on_request_started(self, request: Any) -> None:
        self._inflight.add(request)
        self._changed.set()

    def _on_request_done(self, request: Any) -> None:
        self._inflight.discard(request)
        self._changed.set()

    async def _wait_for_change(self, timeout: Optional[float] = None) -> bool:
        """Wait for the next request event. Returns False on timeout."""
        self._changed.clear()
        try:
            await asyncio.wait_for(self._changed.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def wait_for_idle(self, max_inflight: int, idle_ms: int) -> None:
        """
        Block until at most ``max_inflight`` requests have been pending for ``idle_ms``.

        The quiet window restarts only when the count rises above the limit.
        """
        loop = asyncio.get_running_loop()
        idle_seconds = idle_ms / 1000

        while True:
            while self.inflight > max_inflight:
                await self._wait_for_change()

            deadline = loop.time() + idle_seconds
            while self.inflight <= max_inflight:
                remaining = deadline - loop.time()
                if remaining <= 0 or not await self._wait_for_change(remaining):
                    self.logger.debug(
                        "Network idle", inflight=self.inflight, max_inflight=max_inflight
                    )
                    return
