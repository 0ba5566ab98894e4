"""
Contracts (data models).

This folder defines the shapes exchanged with the storefront backend:
- Product entries returned by GET /products and GET /products/search
- Raw cart entries returned by GET /cart and POST /cart
- Cart view items rendered by the cart sidebar

Why this exists:
- Flows rely on stable, immutable models instead of ad-hoc dicts
- Wire field names (`_id`, `productId`) are translated in one place
"""
