"""
Timer scheduling used by the search debouncer.

The debouncer never touches the event loop directly; it goes through a
`Scheduler` so tests can swap in a virtual clock and run without real delays.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run `callback` once after `delay` seconds; return a cancellable handle."""

    @abstractmethod
    def spawn(self, coro: Awaitable[Any]) -> "asyncio.Future[Any]":
        """Start a coroutine in the background and return its task."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)

    def spawn(self, coro: Awaitable[Any]) -> "asyncio.Future[Any]":
        return asyncio.ensure_future(coro)
