"""
Storefront page state and the transitions that drive it.

`StorefrontState` is an immutable snapshot. Every transition builds a new
snapshot and hands it to subscribers; nothing mutates a snapshot that a
renderer may still be holding.

Transitions:
- load(): page load (catalog + cart fetched concurrently, projected once both resolve)
- on_search_input(query): debounced server-side search replacing `visible_products`
- add_to_cart / change_quantity: cart mutations through CartMutationController
- close(): teardown, cancels the pending search timer

Storefront errors never escape these methods; they are converted to notices.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from storefront.cart.mutation import CartMutationController
from storefront.cart.projector import ProjectionResult, cart_item_count, cart_total, project
from storefront.error_handler import ErrorHandler
from storefront.errors import CatalogServerError, StorefrontError
from storefront.integrations.clients.real_http.cart import CartClient
from storefront.integrations.clients.real_http.catalog import CatalogClient
from storefront.integrations.contracts.cart import CartViewItem
from storefront.integrations.contracts.catalog import Product
from storefront.search.debouncer import DEFAULT_DEBOUNCE_SECONDS, SearchDebouncer
from storefront.search.scheduler import Scheduler
from storefront.session.store import SessionStore
from storefront.notices import Notice, NoticeBoard, NoticeLevel

logger = logging.getLogger(__name__)

INCONSISTENT_CART_MESSAGE = "Some items in your cart are no longer available and were hidden."


@dataclass(frozen=True)
class StorefrontState:
    products: Tuple[Product, ...] = ()
    visible_products: Tuple[Product, ...] = ()
    cart_items: Tuple[CartViewItem, ...] = ()
    catalog_available: bool = True
    loading: bool = False

    @property
    def cart_total(self) -> float:
        return cart_total(self.cart_items)

    @property
    def cart_item_count(self) -> int:
        return cart_item_count(self.cart_items)


StateListener = Callable[[StorefrontState], None]


class StorefrontController:
    def __init__(
        self,
        catalog_client: CatalogClient,
        cart_client: CartClient,
        session_store: SessionStore,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        scheduler: Optional[Scheduler] = None,
        notices: Optional[NoticeBoard] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.catalog_client = catalog_client
        self.cart_client = cart_client
        self.session_store = session_store
        self.notices = notices or NoticeBoard()
        self.error_handler = error_handler or ErrorHandler()
        self.mutations = CartMutationController(cart_client)
        self.debouncer = SearchDebouncer(self._run_search, delay=debounce_seconds, scheduler=scheduler)
        self.state = StorefrontState()
        self._listeners: List[StateListener] = []

    # --- Subscriptions ---------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, **changes) -> StorefrontState:
        self.state = replace(self.state, **changes)
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    def _notify(self, message: str, level: NoticeLevel) -> None:
        self.notices.push(Notice(message=message, level=level))

    def _report(self, exc: Exception, **context) -> None:
        self.notices.push(self.error_handler.to_notice(exc, context=context))

    # --- Page load -------------------------------------------------------------

    async def load(self) -> StorefrontState:
        session = self.session_store.context()
        self._apply(loading=True)

        catalog_outcome, cart_outcome = await asyncio.gather(
            self._capture(self.catalog_client.fetch_all()),
            self._capture(self.cart_client.fetch_cart(session)),
        )
        products, catalog_error = catalog_outcome
        raw_cart, cart_error = cart_outcome

        if catalog_error is not None:
            self._report(catalog_error, stage="catalog")
            products = ()
        if cart_error is not None:
            self._report(cart_error, stage="cart")

        cart_items: Tuple[CartViewItem, ...] = ()
        if catalog_error is None and raw_cart is not None:
            cart_items = self._accept_projection(project(raw_cart, products))
        elif raw_cart:
            logger.warning("Catalog unavailable; skipping projection of %d cart entries", len(raw_cart))

        return self._apply(
            products=tuple(products),
            visible_products=tuple(products),
            cart_items=cart_items,
            catalog_available=catalog_error is None,
            loading=False,
        )

    @staticmethod
    async def _capture(awaitable):
        try:
            return await awaitable, None
        except StorefrontError as e:
            return None, e

    def _accept_projection(self, result: ProjectionResult) -> Tuple[CartViewItem, ...]:
        if not result.is_consistent:
            logger.warning(
                "Cart projection dropped %d entries: %s",
                len(result.inconsistencies),
                [issue.product_id for issue in result.inconsistencies],
            )
            self._notify(INCONSISTENT_CART_MESSAGE, NoticeLevel.WARNING)
        return result.items

    # --- Search ----------------------------------------------------------------

    def on_search_input(self, query: str) -> None:
        self.debouncer.schedule(query)

    async def _run_search(self, query: str) -> None:
        # Runs as a detached task: nothing awaits it, so every failure ends here.
        try:
            await self._search(query)
        except Exception as e:
            self._report(e, stage="search", query=query)

    async def _search(self, query: str) -> None:
        if not query.strip():
            # Cleared search box shows the unfiltered catalog again.
            self._apply(visible_products=self.state.products)
            return
        try:
            results = await self.catalog_client.search(query)
        except CatalogServerError as e:
            self._report(e, stage="search", query=query)
            self._apply(visible_products=self.state.products)
            return
        except StorefrontError as e:
            self._report(e, stage="search", query=query)
            return
        self._apply(visible_products=tuple(results))

    # --- Cart ------------------------------------------------------------------

    async def add_to_cart(self, product_id: str, qty: int = 1) -> Optional[Tuple[CartViewItem, ...]]:
        """Product card "Add to cart": blocked when the item is already in the cart."""
        return await self._mutate(product_id, qty, prevent_duplicate=True)

    async def change_quantity(self, product_id: str, qty: int) -> Optional[Tuple[CartViewItem, ...]]:
        """Cart sidebar quantity edit; qty 0 removes the item."""
        return await self._mutate(product_id, qty, prevent_duplicate=False)

    async def _mutate(self, product_id: str, qty: int, *, prevent_duplicate: bool) -> Optional[Tuple[CartViewItem, ...]]:
        try:
            result = await self.mutations.add_or_update(
                self.session_store.context(),
                self.state.cart_items,
                self.state.products,
                product_id,
                qty,
                prevent_duplicate=prevent_duplicate,
            )
        except Exception as e:
            # ErrorHandler maps storefront errors to their message, anything else to a generic notice.
            self._report(e, stage="cart_mutation", product_id=product_id)
            return None
        if result is None:
            return None
        return self._apply(cart_items=self._accept_projection(result)).cart_items

    async def reload_cart(self) -> StorefrontState:
        """Re-fetch the raw cart (after login/logout) and project it against the current catalog."""
        try:
            raw_cart = await self.cart_client.fetch_cart(self.session_store.context())
        except StorefrontError as e:
            self._report(e, stage="cart")
            return self.state
        if raw_cart is None:
            return self._apply(cart_items=())
        return self._apply(cart_items=self._accept_projection(project(raw_cart, self.state.products)))

    # --- Teardown --------------------------------------------------------------

    def close(self) -> None:
        self.debouncer.cancel()
        self._listeners.clear()
