"""
In-memory mock of the storefront backend.

Serves the same routes as the real backend so the HTTP clients can run
end-to-end without a server (via httpx.ASGITransport) during development and
tests. Remove or disable in production.

Routes (all under /api/v1):
- GET  /products
- GET  /products/search?value=<text>     404 when nothing matches
- GET  /cart                             bearer token required
- POST /cart {productId, qty}            update-or-append; qty 0 removes; 404 on unknown product
- POST /auth/register {username, password}
- POST /auth/login {username, password}
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
DEFAULT_BALANCE = 5000

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"name": "iPhone XR", "category": "Phones", "cost": 100, "rating": 4, "image": "https://i.imgur.com/lulqWzW.jpg", "_id": "v4sLtEcMpzabRyfx"},
    {"name": "Basketball", "category": "Sports", "cost": 100, "rating": 5, "image": "https://i.imgur.com/lulqWzW.jpg", "_id": "upLK9JbQ4rMhTwt4"},
    {"name": "Tan Leatherette Weekender Duffle", "category": "Fashion", "cost": 150, "rating": 4, "image": "https://crio-directus-assets.s3.ap-south-1.amazonaws.com/ff071a1c-1099-48f9-9b03-f858ccc53832.png", "_id": "BW0jAAeDJmlZCF8i"},
    {"name": "The Minimalist Slim Leather Watch", "category": "Electronics", "cost": 60, "rating": 5, "image": "https://crio-directus-assets.s3.ap-south-1.amazonaws.com/5b478a4a-bf81-467c-964c-4a8fb3f4d6d7.png", "_id": "KCRwjF7lN97HnEaY"},
]


class CartChangeRequest(BaseModel):
    productId: str
    qty: int = Field(ge=0)


class CredentialsRequest(BaseModel):
    username: str
    password: str


class MockStorefrontBackend:
    """Backend state: catalog, accounts, issued tokens and per-user carts."""

    def __init__(self, products: Optional[List[Dict[str, Any]]] = None) -> None:
        self.products: List[Dict[str, Any]] = [dict(p) for p in (SEED_PRODUCTS if products is None else products)]
        self.users: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}
        self.carts: Dict[str, List[Dict[str, Any]]] = {}

    # --- Accounts --------------------------------------------------------------

    def add_user(self, username: str, password: str) -> None:
        self.users[username] = password
        self.carts.setdefault(username, [])

    def issue_token(self, username: str) -> str:
        token = secrets.token_hex(16)
        self.tokens[token] = username
        return token

    def user_for(self, authorization: Optional[str]) -> Optional[str]:
        if not authorization or not authorization.startswith("Bearer "):
            return None
        return self.tokens.get(authorization[len("Bearer "):].strip())

    # --- Catalog ---------------------------------------------------------------

    def find_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        return next((p for p in self.products if p["_id"] == product_id), None)

    def search(self, text: str) -> List[Dict[str, Any]]:
        needle = text.strip().lower()
        return [p for p in self.products if needle in p["name"].lower() or needle in p["category"].lower()]

    # --- Cart ------------------------------------------------------------------

    def change_cart(self, username: str, product_id: str, qty: int) -> List[Dict[str, Any]]:
        cart = self.carts.setdefault(username, [])
        for entry in cart:
            if entry["productId"] == product_id:
                if qty == 0:
                    cart.remove(entry)
                else:
                    entry["qty"] = qty
                break
        else:
            if qty > 0:
                cart.append({"productId": product_id, "qty": qty})
        return [dict(e) for e in cart]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def build_router(backend: MockStorefrontBackend) -> APIRouter:
    router = APIRouter()

    @router.get("/products")
    async def list_products():
        return backend.products

    @router.get("/products/search")
    async def search_products(value: str = ""):
        matches = backend.search(value)
        if not matches:
            return JSONResponse(status_code=404, content=[])
        return matches

    @router.get("/cart")
    async def get_cart(authorization: Optional[str] = Header(default=None)):
        username = backend.user_for(authorization)
        if username is None:
            return _error(401, "Protected route, Oauth2 Bearer token not found")
        return [dict(e) for e in backend.carts.get(username, [])]

    @router.post("/cart")
    async def change_cart(request: CartChangeRequest, authorization: Optional[str] = Header(default=None)):
        username = backend.user_for(authorization)
        if username is None:
            return _error(401, "Protected route, Oauth2 Bearer token not found")
        if backend.find_product(request.productId) is None:
            return _error(404, "Product doesn't exist")
        logger.info("Mock cart change user=%s product=%s qty=%d", username, request.productId, request.qty)
        return backend.change_cart(username, request.productId, request.qty)

    @router.post("/auth/register", status_code=201)
    async def register(request: CredentialsRequest):
        if request.username in backend.users:
            return _error(400, "Username is already taken")
        backend.add_user(request.username, request.password)
        return {"success": True}

    @router.post("/auth/login")
    async def login(request: CredentialsRequest):
        if backend.users.get(request.username) != request.password:
            return _error(400, "Password is incorrect")
        return {
            "success": True,
            "token": backend.issue_token(request.username),
            "username": request.username,
            "balance": DEFAULT_BALANCE,
        }

    return router


def create_mock_app(backend: Optional[MockStorefrontBackend] = None) -> FastAPI:
    backend = backend or MockStorefrontBackend()
    app = FastAPI(
        title="Storefront Mock Backend",
        description="In-memory products, cart and auth routes for local development",
        version="1.0.0",
    )
    app.state.backend = backend
    app.include_router(build_router(backend), prefix=API_PREFIX)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.error("Mock backend error on %s: %s", request.url.path, exc)
        return _error(500, "Something went wrong. Check the backend console for more details")

    return app
