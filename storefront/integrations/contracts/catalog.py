"""
Product catalogue contract.

Products are immutable once fetched: a new catalog fetch replaces the whole
sequence, it never patches entries in place.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    cost: float                          # >= 0
    rating: float                        # 0..5
    image: str                           # URL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using the backend's field names (`_id` instead of `id`)."""
        data = self.to_dict()
        data["_id"] = data.pop("id")
        return data


def index_by_id(catalog: Sequence[Product]) -> Dict[str, Product]:
    """Map product id -> product. The first occurrence of a duplicated id wins."""
    index: Dict[str, Product] = {}
    for product in catalog:
        index.setdefault(product.id, product)
    return index
