from storefront.cart.projector import cart_item_count, cart_total, is_item_in_cart, project
from storefront.errors import CartProjectionInconsistency
from storefront.integrations.contracts.cart import CartViewItem, RawCartEntry


def test_project_copies_qty_and_display_fields(phone):
    result = project([RawCartEntry("A", 2)], [phone])

    assert list(result) == [
        CartViewItem(
            product_id="A",
            qty=2,
            name="Phone",
            category="Phones",
            cost=100,
            rating=4,
            image="https://img/phone.jpg",
        )
    ]
    assert result.is_consistent


def test_project_preserves_raw_cart_order_not_catalog_order(phone, ball):
    raw = [RawCartEntry("B", 1), RawCartEntry("A", 3)]

    result = project(raw, [phone, ball])

    assert [i.product_id for i in result] == ["B", "A"]
    assert [i.qty for i in result] == [1, 3]
    assert len(result) == len(raw)


def test_project_drops_unknown_product_and_records_inconsistency(phone, caplog):
    raw = [RawCartEntry("A", 1), RawCartEntry("ghost", 4)]

    result = project(raw, [phone])

    assert [i.product_id for i in result] == ["A"]
    assert not result.is_consistent
    issue = result.inconsistencies[0]
    assert isinstance(issue, CartProjectionInconsistency)
    assert issue.to_dict() == {"product_id": "ghost", "qty": 4, "message": issue.message}
    assert "ghost" in caplog.text


def test_project_does_not_mutate_inputs_and_returns_new_sequence(phone):
    raw = [RawCartEntry("A", 1)]
    catalog = [phone]

    first = project(raw, catalog)
    second = project(raw, catalog)

    assert raw == [RawCartEntry("A", 1)]
    assert catalog == [phone]
    assert first.items == second.items
    assert first.items is not second.items


def test_project_empty_cart(phone):
    result = project([], [phone])
    assert result.items == ()
    assert result.is_consistent


def test_cart_summary_helpers(phone, ball):
    items = project([RawCartEntry("A", 2), RawCartEntry("B", 2)], [phone, ball]).items

    assert cart_total(items) == 251.0
    assert cart_item_count(items) == 4
    assert is_item_in_cart(items, "B")
    assert not is_item_in_cart(items, "C")
    assert not is_item_in_cart([], "A")
