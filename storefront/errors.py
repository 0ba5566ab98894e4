"""Error taxonomy for the storefront sync layer.

Local validation errors are raised before any network call is attempted.
Integration errors are raised by the HTTP clients and carry the server message
(when the server sent one) so the storefront can show it as a notice.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Local validation (no network attempted)
# ---------------------------------------------------------------------------

class LocalValidationError(StorefrontError):
    pass


class AuthRequired(LocalValidationError):
    def __init__(self, message: str = "Login to add an item to the Cart") -> None:
        super().__init__(message)


class DuplicateItem(LocalValidationError):
    def __init__(
        self,
        product_id: str,
        message: str = "Item already in cart. Use the cart sidebar to update quantity or remove item.",
    ) -> None:
        super().__init__(message)
        self.product_id = product_id


class InvalidQuantity(LocalValidationError):
    def __init__(self, qty: int) -> None:
        super().__init__(f"Quantity must be 0 or more; got {qty}")
        self.qty = qty


# ---------------------------------------------------------------------------
# Integration errors (raised at the client boundary)
# ---------------------------------------------------------------------------

class IntegrationError(StorefrontError):
    pass


class CatalogUnavailable(IntegrationError):
    pass


class CatalogServerError(IntegrationError):
    pass


class CartUnauthorized(IntegrationError):
    pass


class CartUnavailable(IntegrationError):
    pass


class ProductNotFound(IntegrationError):
    def __init__(self, product_id: str, message: str, *, status_code: Optional[int] = 404) -> None:
        super().__init__(message, status_code=status_code)
        self.product_id = product_id


class CartUpdateFailed(IntegrationError):
    pass


class RegistrationFailed(IntegrationError):
    pass


class LoginFailed(IntegrationError):
    pass


class IntegrationResponseError(ValueError):
    """Server payload did not match the expected contract shape."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


# ---------------------------------------------------------------------------
# Projection diagnostics
# ---------------------------------------------------------------------------

class CartProjectionInconsistency(StorefrontError):
    """A raw cart entry references a product missing from the catalog."""

    def __init__(self, product_id: str, qty: int) -> None:
        super().__init__(f"Cart entry references unknown product '{product_id}' (qty={qty}).")
        self.product_id = product_id
        self.qty = qty

    def to_dict(self) -> Dict[str, Any]:
        return {"product_id": self.product_id, "qty": self.qty, "message": self.message}
