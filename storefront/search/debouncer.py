"""
Debounced search dispatch.

Two states: IDLE (nothing scheduled) and PENDING (exactly one timer scheduled).
Every new query cancels the pending timer before scheduling the next one, so a
burst of keystrokes reaches the server as a single search for the last query.
The query is captured when the timer is scheduled, never re-read on fire.

When a timer fires, the search runs as a background task. If an earlier search
is still in flight it is cancelled first, so only the latest query can deliver
results. `cancel()` must be called on teardown; it drops both the pending timer
and any in-flight search.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from storefront.search.scheduler import AsyncioScheduler, Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class DebounceState(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"


class SearchDebouncer:
    def __init__(
        self,
        on_fire: Callable[[str], Awaitable[Any]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0; got {delay}")
        self.on_fire = on_fire
        self.delay = delay
        self.scheduler = scheduler or AsyncioScheduler()
        self._timer: Optional[TimerHandle] = None
        self._pending_query: Optional[str] = None
        self._in_flight = None

    @property
    def state(self) -> DebounceState:
        return DebounceState.PENDING if self._timer is not None else DebounceState.IDLE

    @property
    def pending_query(self) -> Optional[str]:
        return self._pending_query

    def schedule(self, query: str) -> None:
        self._cancel_timer()
        self._pending_query = query
        self._timer = self.scheduler.call_later(self.delay, lambda: self._fire(query))
        logger.debug("Search scheduled in %.3fs for %r", self.delay, query)

    def cancel(self) -> None:
        """Teardown hook: drop the pending timer and any in-flight search."""
        self._cancel_timer()
        if self._in_flight is not None and not self._in_flight.done():
            logger.debug("Cancelling in-flight search")
            self._in_flight.cancel()
        self._in_flight = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending_query = None

    def _fire(self, query: str) -> None:
        self._timer = None
        self._pending_query = None
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()
        logger.info("Dispatching search for %r", query)
        self._in_flight = self.scheduler.spawn(self.on_fire(query))
