"""
Integrations layer.
This package contains all code used to communicate with the storefront backend:
- Product catalogue (full listing and server-side search)
- Authenticated user cart (fetch and add/update)
- Account registration and login

Key rule:
- Cart/search state logic MUST NOT call the backend directly.
- It should call the integration clients (under storefront/integrations/clients).
- Clients talk to the real backend over HTTP, or to the in-process mock backend
  (storefront/api/mock_backend.py) during development and tests.

Switching implementations:
- The selection of mock vs real backend happens in ONE place (storefront/dependencies.py).
"""

from .contracts.catalog import Product
from .contracts.cart import CartViewItem, RawCartEntry

__all__ = ["CartViewItem", "Product", "RawCartEntry"]
