"""
Account HTTP Client.

Registration (POST /auth/register) and login (POST /auth/login). Login returns
the credentials; writing them into the SessionStore is left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

import httpx

from storefront.errors import LoginFailed, RegistrationFailed
from storefront.integrations.clients.real_http.base import BackendHttpClient, response_json
from storefront.integrations.policy.response_wrappers import extract_server_message

logger = logging.getLogger(__name__)

BACKEND_DOWN_MESSAGE = (
    "Something went wrong. Check that the backend is running, reachable and returns valid JSON."
)


class AuthClient(BackendHttpClient):
    async def register(self, username: str, password: str) -> None:
        status, body = await self._post("/auth/register", {"username": username, "password": password}, RegistrationFailed)
        if status != 201 or not isinstance(body, dict) or not body.get("success"):
            logger.warning("Unexpected register response (status=%s): %r", status, body)
            raise RegistrationFailed(extract_server_message(body, BACKEND_DOWN_MESSAGE), status_code=status)
        logger.info("Registered user %s", username)

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        _, body = await self._post("/auth/login", {"username": username, "password": password}, LoginFailed)
        if not isinstance(body, dict) or not body.get("success") or not body.get("token"):
            raise LoginFailed(extract_server_message(body, BACKEND_DOWN_MESSAGE))
        try:
            balance = float(body.get("balance", 0))
        except (TypeError, ValueError) as e:
            logger.error("Invalid balance in login payload: %r", body.get("balance"))
            raise LoginFailed(BACKEND_DOWN_MESSAGE) from e
        logger.info("Logged in as %s", body.get("username") or username)
        return {"token": body["token"], "username": body.get("username") or username, "balance": balance}

    async def _post(self, path: str, payload: Dict[str, Any], error_type) -> Tuple[int, Any]:
        url = self._url(path)
        try:
            async with self._client() as client:
                response = await client.post(url, json=payload)
        except httpx.RequestError as e:
            logger.error("Request error connecting to auth API: %s", e)
            raise error_type(BACKEND_DOWN_MESSAGE) from e

        body = response_json(response)
        if response.status_code >= 400:
            message = extract_server_message(body, BACKEND_DOWN_MESSAGE)
            logger.warning("Auth API %s returned %s: %s", path, response.status_code, message)
            raise error_type(message, status_code=response.status_code)
        return response.status_code, body
