import asyncio

import pytest

from storefront.cart.mutation import CartMutationController
from storefront.cart.projector import project
from storefront.errors import AuthRequired, CartUpdateFailed, DuplicateItem, InvalidQuantity, ProductNotFound
from storefront.integrations.contracts.cart import RawCartEntry
from storefront.session.store import SessionContext


class FakeCartClient:
    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response if response is not None else []
        self.error = error

    async def post_cart_change(self, session, product_id, qty):
        self.calls.append((session.token, product_id, qty))
        if self.error is not None:
            raise self.error
        return tuple(self.response)


class GatedCartClient:
    """Replies only when the test releases the gate for a given call."""

    def __init__(self):
        self.gates = []

    async def post_cart_change(self, session, product_id, qty):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return (RawCartEntry(product_id, qty),)


@pytest.mark.asyncio
async def test_missing_token_raises_auth_required_without_network(phone):
    client = FakeCartClient()
    controller = CartMutationController(client)

    for token in (None, ""):
        with pytest.raises(AuthRequired) as exc:
            await controller.add_or_update(SessionContext(token=token), [], [phone], "A", 1, prevent_duplicate=True)
        assert exc.value.message == "Login to add an item to the Cart"

    assert client.calls == []


@pytest.mark.asyncio
async def test_duplicate_add_is_blocked_without_network(phone):
    client = FakeCartClient()
    controller = CartMutationController(client)
    current = project([RawCartEntry("A", 1)], [phone]).items

    with pytest.raises(DuplicateItem) as exc:
        await controller.add_or_update(SessionContext(token="t"), current, [phone], "A", 1, prevent_duplicate=True)

    assert exc.value.product_id == "A"
    assert "already in cart" in exc.value.message
    assert client.calls == []


@pytest.mark.asyncio
async def test_auth_checked_before_duplicate(phone):
    client = FakeCartClient()
    controller = CartMutationController(client)
    current = project([RawCartEntry("A", 1)], [phone]).items

    with pytest.raises(AuthRequired):
        await controller.add_or_update(SessionContext(), current, [phone], "A", 1, prevent_duplicate=True)


@pytest.mark.asyncio
async def test_add_to_empty_cart_projects_server_response(phone):
    client = FakeCartClient(response=[RawCartEntry("A", 1)])
    controller = CartMutationController(client)

    result = await controller.add_or_update(SessionContext(token="t"), [], [phone], "A", 1, prevent_duplicate=True)

    assert client.calls == [("t", "A", 1)]
    assert len(result) == 1
    item = result.items[0]
    assert (item.product_id, item.qty, item.name) == ("A", 1, "Phone")


@pytest.mark.asyncio
async def test_quantity_update_allowed_for_existing_item(phone, ball):
    client = FakeCartClient(response=[RawCartEntry("B", 1), RawCartEntry("A", 5)])
    controller = CartMutationController(client)
    current = project([RawCartEntry("B", 1), RawCartEntry("A", 1)], [phone, ball]).items

    result = await controller.add_or_update(SessionContext(token="t"), current, [phone, ball], "A", 5)

    assert [(i.product_id, i.qty) for i in result] == [("B", 1), ("A", 5)]


@pytest.mark.asyncio
async def test_client_errors_propagate(phone):
    for error in (ProductNotFound("X", "Product doesn't exist"), CartUpdateFailed("boom")):
        controller = CartMutationController(FakeCartClient(error=error))
        with pytest.raises(type(error)):
            await controller.add_or_update(SessionContext(token="t"), [], [phone], "X", 1)


@pytest.mark.asyncio
async def test_negative_qty_rejected(phone):
    client = FakeCartClient()
    controller = CartMutationController(client)

    with pytest.raises(InvalidQuantity):
        await controller.add_or_update(SessionContext(token="t"), [], [phone], "A", -1)
    assert client.calls == []


@pytest.mark.asyncio
async def test_stale_response_is_discarded(phone, ball):
    client = GatedCartClient()
    controller = CartMutationController(client)
    session = SessionContext(token="t")

    first = asyncio.ensure_future(controller.add_or_update(session, [], [phone, ball], "A", 1))
    second = asyncio.ensure_future(controller.add_or_update(session, [], [phone, ball], "B", 2))
    await asyncio.sleep(0)
    assert len(client.gates) == 2

    # Newer request answers first, older one arrives late.
    client.gates[1].set()
    newer = await second
    client.gates[0].set()
    older = await first

    assert [(i.product_id, i.qty) for i in newer] == [("B", 2)]
    assert older is None
    assert controller.last_applied == 2
