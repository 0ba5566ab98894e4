"""
Cart projection: raw server cart + catalog -> renderable cart view items.

`project` is pure. It never mutates its inputs and always returns fresh tuples,
so a renderer holding the previous result never sees it change underfoot.

A raw entry whose product id is missing from the catalog is dropped from the
view and reported in `ProjectionResult.inconsistencies`; the projector never
emits a half-populated item and never raises for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple

from storefront.errors import CartProjectionInconsistency
from storefront.integrations.contracts.cart import CartViewItem, RawCartEntry
from storefront.integrations.contracts.catalog import Product, index_by_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionResult:
    items: Tuple[CartViewItem, ...] = ()
    inconsistencies: Tuple[CartProjectionInconsistency, ...] = field(default=())

    @property
    def is_consistent(self) -> bool:
        return not self.inconsistencies

    def __iter__(self) -> Iterator[CartViewItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def project(raw_cart: Sequence[RawCartEntry], catalog: Sequence[Product]) -> ProjectionResult:
    """Merge raw cart entries with catalog products, keeping raw cart order."""
    products = index_by_id(catalog)
    items = []
    inconsistencies = []

    for entry in raw_cart or ():
        product = products.get(entry.product_id)
        if product is None:
            issue = CartProjectionInconsistency(entry.product_id, entry.qty)
            logger.warning("Dropping cart entry from view: %s", issue.message)
            inconsistencies.append(issue)
            continue
        items.append(CartViewItem.from_entry(entry, product))

    return ProjectionResult(items=tuple(items), inconsistencies=tuple(inconsistencies))


# ---------------------------------------------------------------------------
# Cart summary helpers
# ---------------------------------------------------------------------------

def is_item_in_cart(items: Sequence[CartViewItem], product_id: str) -> bool:
    return any(item.product_id == product_id for item in items or ())


def cart_total(items: Sequence[CartViewItem]) -> float:
    return sum(item.subtotal for item in items or ())


def cart_item_count(items: Sequence[CartViewItem]) -> int:
    return sum(item.qty for item in items or ())
