import pytest

from storefront.api.mock_backend import MockStorefrontBackend
from storefront.dependencies import build_storefront
from storefront.utils.config_loader import BackendConfig, StorefrontConfig


def mock_config():
    return StorefrontConfig(backend=BackendConfig(use_mock=True))


@pytest.mark.asyncio
async def test_full_session_against_mock_backend(scheduler):
    app = build_storefront(mock_config(), scheduler=scheduler, mock_backend=MockStorefrontBackend())
    controller = app.controller

    state = await controller.load()
    assert len(state.products) == 4
    assert state.cart_items == ()

    assert await app.account.register("demo.shopper", "secret1", "secret1")
    assert await app.account.login("demo.shopper", "secret1") is not None
    await controller.reload_cart()

    watch_id = "KCRwjF7lN97HnEaY"
    items = await controller.add_to_cart(watch_id)
    assert [(i.product_id, i.qty, i.name) for i in items] == [(watch_id, 1, "The Minimalist Slim Leather Watch")]

    items = await controller.change_quantity(watch_id, 2)
    assert controller.state.cart_total == 120
    assert app.mock_backend.carts["demo.shopper"] == [{"productId": watch_id, "qty": 2}]

    await controller.add_to_cart("unknown-product", 1)
    assert app.notices.notices[-1].message == "Product doesn't exist"
    assert [(i.product_id, i.qty) for i in controller.state.cart_items] == [(watch_id, 2)]

    controller.on_search_input("sports")
    scheduler.advance(0.5)
    await scheduler.drain()
    assert [p.name for p in controller.state.visible_products] == ["Basketball"]

    controller.on_search_input("zzz")
    scheduler.advance(0.5)
    await scheduler.drain()
    assert controller.state.visible_products == ()

    app.account.logout()
    state = await controller.reload_cart()
    assert state.cart_items == ()
    controller.close()


@pytest.mark.asyncio
async def test_explicit_transport_overrides_mock_flag(scheduler, failing_transport):
    app = build_storefront(mock_config(), transport=failing_transport, scheduler=scheduler)

    state = await app.controller.load()

    assert app.mock_backend is None
    assert state.catalog_available is False
    assert "Could not fetch products" in app.notices.notices[0].message
