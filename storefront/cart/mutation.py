"""
Cart mutation protocol.

`CartMutationController.add_or_update` runs the local pre-conditions, in order,
before anything touches the network:

1. no auth token            -> AuthRequired
2. prevent_duplicate and the product is already in the cart -> DuplicateItem
3. negative qty               -> InvalidQuantity

When all pass it posts the change through the CartClient and re-projects the
returned raw cart against the supplied catalog. The result replaces the
client-side cart; on failure the client's error propagates and the caller's
state is left untouched.

Every network mutation gets a sequence number. A response that arrives after a
newer one has already been applied is discarded (`None` is returned) so an
out-of-order reply can never overwrite fresher cart state.
"""

from __future__ import annotations

import itertools
import logging
from typing import Optional, Sequence

from storefront.cart.projector import ProjectionResult, is_item_in_cart, project
from storefront.errors import AuthRequired, DuplicateItem, InvalidQuantity
from storefront.integrations.clients.real_http.cart import CartClient
from storefront.integrations.contracts.cart import CartViewItem
from storefront.integrations.contracts.catalog import Product
from storefront.session.store import SessionContext

logger = logging.getLogger(__name__)


class CartMutationController:
    def __init__(self, cart_client: CartClient) -> None:
        self.cart_client = cart_client
        self._sequence = itertools.count(1)
        self._last_applied = 0

    @property
    def last_applied(self) -> int:
        return self._last_applied

    def check_preconditions(
        self,
        session: SessionContext,
        current_items: Sequence[CartViewItem],
        product_id: str,
        *,
        prevent_duplicate: bool = False,
    ) -> None:
        if not session.token:
            raise AuthRequired()
        if prevent_duplicate and is_item_in_cart(current_items, product_id):
            raise DuplicateItem(product_id)

    async def add_or_update(
        self,
        session: SessionContext,
        current_items: Sequence[CartViewItem],
        catalog: Sequence[Product],
        product_id: str,
        qty: int,
        *,
        prevent_duplicate: bool = False,
    ) -> Optional[ProjectionResult]:
        self.check_preconditions(session, current_items, product_id, prevent_duplicate=prevent_duplicate)
        if qty < 0:
            raise InvalidQuantity(qty)

        seq = next(self._sequence)
        logger.info("Cart mutation #%d: product=%s qty=%d", seq, product_id, qty)
        raw_cart = await self.cart_client.post_cart_change(session, product_id, qty)

        if seq < self._last_applied:
            logger.warning(
                "Discarding stale cart response #%d (already applied #%d)", seq, self._last_applied
            )
            return None
        self._last_applied = seq
        return project(raw_cart, catalog)
