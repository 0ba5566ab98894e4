"""
Cart HTTP Client.

Purpose:
- Fetches the authenticated user's raw cart (GET /cart)
- Posts additions/quantity updates (POST /cart with {productId, qty})

Usage:
- fetch_cart is called on page load by StorefrontController
- post_cart_change is only called by CartMutationController, after its checks

Important:
- The server decides create-vs-update; the returned list is the new source of
  truth and callers must replace their cached cart with it.
- The bearer token comes from the SessionContext passed in; it is never logged.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import httpx

from storefront.errors import (
    CartUnauthorized,
    CartUnavailable,
    CartUpdateFailed,
    IntegrationResponseError,
    ProductNotFound,
)
from storefront.integrations.clients.real_http.base import BackendHttpClient, response_json
from storefront.integrations.contracts.cart import RawCartEntry
from storefront.integrations.policy.response_wrappers import extract_server_message, normalize_cart
from storefront.session.store import SessionContext

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = (
    "Could not fetch cart details. Check that the backend is running, reachable and returns valid JSON."
)
UPDATE_FAILED_MESSAGE = "Could not update the cart. Check that the backend is running."


class CartClient(BackendHttpClient):
    async def fetch_cart(self, session: SessionContext) -> Optional[Tuple[RawCartEntry, ...]]:
        """Raw cart of the logged-in user, or None when there is no token."""
        if not session.token:
            return None

        url = self._url("/cart")
        try:
            logger.info("Fetching cart from %s", url)
            async with self._client() as client:
                response = await client.get(url, headers=session.auth_headers())
        except httpx.RequestError as e:
            logger.error("Request error connecting to cart API: %s", e)
            raise CartUnavailable(FETCH_FAILED_MESSAGE) from e

        body = response_json(response)
        if response.status_code in (401, 403):
            message = extract_server_message(body, "Session expired. Please log in again.")
            logger.warning("Cart API rejected the session token: %s", response.status_code)
            raise CartUnauthorized(message, status_code=response.status_code)
        if response.status_code != 200:
            logger.error("Cart API error: %s", response.status_code)
            raise CartUnavailable(
                extract_server_message(body, FETCH_FAILED_MESSAGE),
                status_code=response.status_code,
            )

        try:
            entries = normalize_cart(body)
        except IntegrationResponseError as e:
            logger.error("Invalid cart payload: %s", e)
            raise CartUnavailable(FETCH_FAILED_MESSAGE, status_code=response.status_code) from e
        logger.info("Received cart with %d entries", len(entries))
        return entries

    async def post_cart_change(self, session: SessionContext, product_id: str, qty: int) -> Tuple[RawCartEntry, ...]:
        url = self._url("/cart")
        payload = {"productId": product_id, "qty": qty}
        try:
            logger.info("Posting cart change to %s: %s", url, payload)
            async with self._client() as client:
                response = await client.post(url, json=payload, headers=session.auth_headers())
        except httpx.RequestError as e:
            logger.error("Request error connecting to cart API: %s", e)
            raise CartUpdateFailed(UPDATE_FAILED_MESSAGE) from e

        body = response_json(response)
        if response.status_code == 404:
            message = extract_server_message(body, "Product doesn't exist")
            logger.warning("Cart API does not know product %s", product_id)
            raise ProductNotFound(product_id, message, status_code=404)
        if response.status_code != 200:
            logger.error("Cart update failed: %s", response.status_code)
            raise CartUpdateFailed(
                extract_server_message(body, UPDATE_FAILED_MESSAGE),
                status_code=response.status_code,
            )

        try:
            return normalize_cart(body)
        except IntegrationResponseError as e:
            logger.error("Invalid cart payload after update: %s", e)
            raise CartUpdateFailed(UPDATE_FAILED_MESSAGE, status_code=response.status_code) from e
