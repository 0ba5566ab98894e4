"""
Wiring for the storefront sync layer.

The choice between the real backend and the in-process mock backend is made
here and nowhere else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.api.mock_backend import API_PREFIX, MockStorefrontBackend, create_mock_app
from storefront.integrations.clients.real_http.auth import AuthClient
from storefront.integrations.clients.real_http.cart import CartClient
from storefront.integrations.clients.real_http.catalog import CatalogClient
from storefront.notices import NoticeBoard
from storefront.search.scheduler import Scheduler
from storefront.session.store import InMemorySessionStore, SessionStore
from storefront.state.account import AccountController
from storefront.state.storefront import StorefrontController
from storefront.utils.config_loader import StorefrontConfig

logger = logging.getLogger(__name__)

MOCK_BASE_URL = f"http://mock-backend{API_PREFIX}"


@dataclass
class Storefront:
    config: StorefrontConfig
    session_store: SessionStore
    notices: NoticeBoard
    catalog_client: CatalogClient
    cart_client: CartClient
    auth_client: AuthClient
    controller: StorefrontController
    account: AccountController
    mock_backend: Optional[MockStorefrontBackend] = None


def build_storefront(
    config: Optional[StorefrontConfig] = None,
    session_store: Optional[SessionStore] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    scheduler: Optional[Scheduler] = None,
    mock_backend: Optional[MockStorefrontBackend] = None,
) -> Storefront:
    config = config or StorefrontConfig()
    session_store = session_store or InMemorySessionStore()
    base_url = config.api.base_url

    if transport is None and config.backend.use_mock:
        mock_backend = mock_backend or MockStorefrontBackend()
        transport = httpx.ASGITransport(app=create_mock_app(mock_backend))
        base_url = MOCK_BASE_URL
        logger.info("Using in-process mock storefront backend")
    else:
        logger.info("Using storefront backend at %s", base_url)

    client_kwargs = {"base_url": base_url, "timeout_seconds": config.api.timeout_seconds, "transport": transport}
    catalog_client = CatalogClient(**client_kwargs)
    cart_client = CartClient(**client_kwargs)
    auth_client = AuthClient(**client_kwargs)

    notices = NoticeBoard()
    controller = StorefrontController(
        catalog_client,
        cart_client,
        session_store,
        debounce_seconds=config.search.debounce_seconds,
        scheduler=scheduler,
        notices=notices,
    )
    account = AccountController(auth_client, session_store, notices=notices)

    return Storefront(
        config=config,
        session_store=session_store,
        notices=notices,
        catalog_client=catalog_client,
        cart_client=cart_client,
        auth_client=auth_client,
        controller=controller,
        account=account,
        mock_backend=mock_backend,
    )
