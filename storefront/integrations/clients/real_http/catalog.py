"""
Catalog HTTP Client.

Purpose:
- Fetches the full product catalogue (GET /products)
- Runs server-side search (GET /products/search?value=<query>)

Error mapping:
- transport failure or unreadable payload -> CatalogUnavailable
- 5xx -> CatalogServerError carrying the server message
- 404 on search -> empty result (no matches is not an error)

Important:
- No caching here; callers keep whatever they fetched.
"""

from __future__ import annotations

import logging
from typing import Tuple

import httpx

from storefront.errors import CatalogServerError, CatalogUnavailable, IntegrationResponseError
from storefront.integrations.clients.real_http.base import BackendHttpClient, response_json
from storefront.integrations.contracts.catalog import Product
from storefront.integrations.policy.response_wrappers import extract_server_message, normalize_catalog

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = (
    "Could not fetch products. Check that the backend is running, reachable and returns valid JSON."
)
SERVER_ERROR_MESSAGE = "Something went wrong. Check the backend console for more details"


class CatalogClient(BackendHttpClient):
    async def fetch_all(self) -> Tuple[Product, ...]:
        """Full catalog, in the order the server returned it."""
        return await self._get_products("/products")

    async def search(self, query: str) -> Tuple[Product, ...]:
        """Server-side filtered catalog. The query is passed through as-is."""
        return await self._get_products("/products/search", params={"value": query}, empty_on_404=True)

    async def _get_products(self, path: str, params=None, empty_on_404: bool = False) -> Tuple[Product, ...]:
        url = self._url(path)
        try:
            logger.info("Fetching products from %s params=%s", url, params or {})
            async with self._client() as client:
                response = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("Request error connecting to catalog API: %s", e)
            raise CatalogUnavailable(UNAVAILABLE_MESSAGE) from e

        body = response_json(response)
        if response.status_code == 404 and empty_on_404:
            logger.info("No products matched params=%s", params)
            return ()
        if response.status_code >= 500:
            message = extract_server_message(body, SERVER_ERROR_MESSAGE)
            logger.error("Catalog API server error: %s %s", response.status_code, message)
            raise CatalogServerError(message, status_code=response.status_code)
        if response.status_code != 200:
            logger.error("Unexpected catalog API status: %s", response.status_code)
            raise CatalogUnavailable(
                extract_server_message(body, UNAVAILABLE_MESSAGE),
                status_code=response.status_code,
            )

        try:
            products = normalize_catalog(body)
        except IntegrationResponseError as e:
            logger.error("Invalid catalog payload from %s: %s", url, e)
            raise CatalogUnavailable(UNAVAILABLE_MESSAGE, status_code=response.status_code) from e
        logger.info("Received %d products from %s", len(products), url)
        return products
