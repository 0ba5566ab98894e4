"""
Response normalization for storefront backend payloads.

Every payload coming back from the backend passes through these helpers before
reaching the rest of the package, so callers only ever see contract objects
(storefront/integrations/contracts/*).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from storefront.errors import IntegrationResponseError
from storefront.integrations.contracts.cart import RawCartEntry
from storefront.integrations.contracts.catalog import Product


class ProductResponseModel(BaseModel):
    id: str = Field(min_length=1)
    name: str
    category: str = ""
    cost: float = Field(ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    image: str = ""


class CartEntryResponseModel(BaseModel):
    product_id: str = Field(min_length=1)
    qty: int = Field(ge=1)


def normalize_product(raw: Dict[str, Any]) -> Product:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Product entry must be an object; got {type(raw).__name__}.", payload=raw)
    model = _build_model(
        ProductResponseModel,
        {
            "id": str(_first_non_empty(raw, "_id", "id")),
            "name": _first_non_empty(raw, "name"),
            "category": raw.get("category") or "",
            "cost": _first_non_empty(raw, "cost", default=0),
            "rating": _first_non_empty(raw, "rating", default=0),
            "image": raw.get("image") or "",
        },
        raw,
    )
    return Product(**model.model_dump())


def normalize_catalog(raw: Any) -> Tuple[Product, ...]:
    """Normalize a product listing, keeping the server's order."""
    return tuple(normalize_product(item) for item in _require_list(raw, "product listing"))


def normalize_cart_entry(raw: Dict[str, Any]) -> RawCartEntry:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Cart entry must be an object; got {type(raw).__name__}.", payload=raw)
    model = _build_model(
        CartEntryResponseModel,
        {
            "product_id": str(_first_non_empty(raw, "productId", "product_id")),
            "qty": _first_non_empty(raw, "qty", "quantity"),
        },
        raw,
    )
    return RawCartEntry(product_id=model.product_id, qty=model.qty)


def normalize_cart(raw: Any) -> Tuple[RawCartEntry, ...]:
    return tuple(normalize_cart_entry(item) for item in _require_list(raw, "cart"))


def extract_server_message(body: Any, default: Optional[str] = None) -> Optional[str]:
    """Pull the human-readable `message` out of a `{success, message}` error body."""
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return default


def _require_list(raw: Any, label: str) -> List[Any]:
    if not isinstance(raw, list):
        raise IntegrationResponseError(f"Expected a list for {label}; got {type(raw).__name__}.", payload=raw)
    return raw


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
