import httpx
import pytest

from storefront.errors import CartUnauthorized, CartUnavailable, CartUpdateFailed, ProductNotFound
from storefront.integrations.clients.real_http.cart import CartClient
from storefront.integrations.contracts.cart import RawCartEntry
from storefront.session.store import SessionContext

WATCH_ID = "KCRwjF7lN97HnEaY"
DUFFLE_ID = "BW0jAAeDJmlZCF8i"


@pytest.mark.asyncio
async def test_fetch_cart_without_token_returns_none_and_skips_network(base_url):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    client = CartClient(base_url=base_url, transport=httpx.MockTransport(handler))

    assert await client.fetch_cart(SessionContext()) is None
    assert await client.fetch_cart(SessionContext(token="")) is None
    assert calls == []


@pytest.mark.asyncio
async def test_fetch_cart_sends_bearer_token(base_url):
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[{"productId": WATCH_ID, "qty": 3}, {"productId": DUFFLE_ID, "qty": 1}])

    client = CartClient(base_url=base_url, transport=httpx.MockTransport(handler))

    entries = await client.fetch_cart(SessionContext(token="abc"))

    assert seen["auth"] == "Bearer abc"
    assert entries == (RawCartEntry(WATCH_ID, 3), RawCartEntry(DUFFLE_ID, 1))


@pytest.mark.asyncio
async def test_fetch_cart_rejected_token_is_unauthorized(asgi_transport, base_url):
    client = CartClient(base_url=base_url, transport=asgi_transport)

    with pytest.raises(CartUnauthorized) as exc:
        await client.fetch_cart(SessionContext(token="expired"))
    assert "Bearer token" in exc.value.message
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_fetch_cart_other_failures_are_unavailable(status_transport, failing_transport, base_url):
    for transport in (status_transport(500, {"message": "boom"}), failing_transport, status_transport(200, "nope")):
        client = CartClient(base_url=base_url, transport=transport)
        with pytest.raises(CartUnavailable):
            await client.fetch_cart(SessionContext(token="t"))


@pytest.mark.asyncio
async def test_post_cart_change_appends_then_updates(asgi_transport, user_token, base_url):
    client = CartClient(base_url=base_url, transport=asgi_transport)
    session = SessionContext(token=user_token)

    after_add = await client.post_cart_change(session, WATCH_ID, 1)
    after_second = await client.post_cart_change(session, DUFFLE_ID, 2)
    after_update = await client.post_cart_change(session, WATCH_ID, 4)

    assert after_add == (RawCartEntry(WATCH_ID, 1),)
    assert after_second == (RawCartEntry(WATCH_ID, 1), RawCartEntry(DUFFLE_ID, 2))
    assert after_update == (RawCartEntry(WATCH_ID, 4), RawCartEntry(DUFFLE_ID, 2))
    assert await client.fetch_cart(session) == after_update


@pytest.mark.asyncio
async def test_post_cart_change_zero_qty_removes(asgi_transport, user_token, base_url):
    client = CartClient(base_url=base_url, transport=asgi_transport)
    session = SessionContext(token=user_token)

    await client.post_cart_change(session, WATCH_ID, 2)
    assert await client.post_cart_change(session, WATCH_ID, 0) == ()


@pytest.mark.asyncio
async def test_post_unknown_product_is_product_not_found(asgi_transport, user_token, base_url):
    client = CartClient(base_url=base_url, transport=asgi_transport)

    with pytest.raises(ProductNotFound) as exc:
        await client.post_cart_change(SessionContext(token=user_token), "nope", 1)
    assert exc.value.product_id == "nope"
    assert exc.value.message == "Product doesn't exist"


@pytest.mark.asyncio
async def test_post_other_failures_are_update_failed(asgi_transport, failing_transport, status_transport, base_url):
    for transport in (asgi_transport, failing_transport, status_transport(500)):
        client = CartClient(base_url=base_url, transport=transport)
        with pytest.raises(CartUpdateFailed):
            await client.post_cart_change(SessionContext(token="bad-token"), WATCH_ID, 1)
