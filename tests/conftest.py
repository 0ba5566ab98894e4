"""Pytest fixtures for storefront client, cart and search tests."""

import asyncio
from typing import Any, Callable, List

import httpx
import pytest

from storefront.api.mock_backend import API_PREFIX, MockStorefrontBackend, create_mock_app
from storefront.integrations.contracts.catalog import Product
from storefront.search.scheduler import Scheduler

BASE_URL = f"http://testserver{API_PREFIX}"


class VirtualTimer:
    def __init__(self, due: float, callback: Callable[[], Any]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler(Scheduler):
    """Virtual clock: timers only fire when the test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[VirtualTimer] = []
        self.tasks: List[asyncio.Future] = []

    def call_later(self, delay, callback):
        timer = VirtualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self.tasks.append(task)
        return task

    @property
    def live_timers(self) -> List[VirtualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted((t for t in self.live_timers if t.due <= self.now), key=lambda t: t.due)
        for timer in due:
            self.timers.remove(timer)
            timer.callback()

    async def drain(self) -> None:
        tasks, self.tasks = self.tasks, []
        await asyncio.gather(*tasks, return_exceptions=True)


@pytest.fixture
def scheduler():
    return VirtualScheduler()


@pytest.fixture
def mock_backend():
    backend = MockStorefrontBackend()
    backend.add_user("crio.user", "learnwithcrio")
    return backend


@pytest.fixture
def user_token(mock_backend):
    return mock_backend.issue_token("crio.user")


@pytest.fixture
def asgi_transport(mock_backend):
    return httpx.ASGITransport(app=create_mock_app(mock_backend))


@pytest.fixture
def phone():
    return Product(id="A", name="Phone", category="Phones", cost=100, rating=4, image="https://img/phone.jpg")


@pytest.fixture
def ball():
    return Product(id="B", name="Basketball", category="Sports", cost=25.5, rating=5, image="https://img/ball.jpg")


@pytest.fixture
def status_transport():
    """Factory for a transport that answers every request with the given status/body."""

    def make(status_code: int, body: Any = None) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=body)

        return httpx.MockTransport(handler)

    return make


@pytest.fixture
def failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def base_url():
    return BASE_URL
