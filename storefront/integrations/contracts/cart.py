"""
Cart contracts.

RawCartEntry is the server-owned `(productId, qty)` pair; the client only keeps
a cached copy and replaces it wholesale with every server response.
CartViewItem is a raw entry enriched with the matching product's display fields.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .catalog import Product


@dataclass(frozen=True)
class RawCartEntry:
    product_id: str
    qty: int                             # >= 1


@dataclass(frozen=True)
class CartViewItem:
    product_id: str
    qty: int
    name: str
    category: str
    cost: float
    rating: float
    image: str

    @classmethod
    def from_entry(cls, entry: RawCartEntry, product: Product) -> "CartViewItem":
        return cls(
            product_id=entry.product_id,
            qty=entry.qty,
            name=product.name,
            category=product.category,
            cost=product.cost,
            rating=product.rating,
            image=product.image,
        )

    @property
    def subtotal(self) -> float:
        return self.cost * self.qty

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
