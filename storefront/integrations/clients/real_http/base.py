"""Shared httpx plumbing for the storefront backend clients."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8082/api/v1"


class BackendHttpClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"


def response_json(response: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Non-JSON body from %s (status=%s)", response.request.url, response.status_code)
        return None
