"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.order import Order
from ordering.order.placement import place_order
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def checkout():
    """Mutable checkout input assembled by Given steps."""
    return {"customer": {}, "items": [], "terms_accepted": True, "idempotency_key": None}


@pytest.fixture()
def outcome():
    """Results and errors captured by When steps."""
    return {"confirmations": [], "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a placed order", target_fixture="confirmation")
def placed_order():
    return place_order(
        customer={
            "full_name": "Kofi Mensah",
            "phone": "+233 24 123 4567",
            "city": "Accra",
            "address": "7 Ring Road",
        },
        items=[{"product_id": "prod-kettle", "product_name": "Kettle", "unit_price": 24.5, "quantity": 1}],
        terms_accepted=True,
    )


@given(parsers.cfparse('the order status is set to "{status}"'))
def order_status_set(confirmation, status):
    current_domain.process(
        UpdateOrderStatus(order_id=confirmation.order_id, status=status, changed_by="admin"),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(confirmation, status):
    assert current_domain.repository_for(Order).get(confirmation.order_id).status == status


@then(parsers.cfparse("{count:d} order is stored"))
def orders_stored(count):
    assert len(list(current_domain.repository_for(Order).iter_all())) == count


@then("no order is stored")
def no_order_stored():
    assert list(current_domain.repository_for(Order).iter_all()) == []
