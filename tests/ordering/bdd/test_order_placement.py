"""BDD tests for cash-on-delivery order placement."""

from ordering.order.errors import CheckoutError
from ordering.order.placement import place_order
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_placement.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a checkout for "{full_name}" in "{city}"'))
def checkout_for(checkout, full_name, city):
    checkout["customer"] = {
        "full_name": full_name,
        "phone": "+234 801 234 5678",
        "city": city,
        "address": "12 Marina Road",
    }


@given(parsers.cfparse('the basket holds {quantity:d} of "{name}" at {price:f}'))
def basket_holds(checkout, quantity, name, price):
    checkout["items"].append(
        {
            "product_id": f"prod-{name.lower().replace(' ', '-')}",
            "product_name": name,
            "unit_price": price,
            "quantity": quantity,
        }
    )


@given("the customer has not accepted the terms")
def terms_not_accepted(checkout):
    checkout["terms_accepted"] = False


@given(parsers.cfparse("the customer's phone is \"{phone}\""))
def customer_phone(checkout, phone):
    checkout["customer"]["phone"] = phone


@given(parsers.cfparse('the checkout is keyed "{key}"'))
def checkout_keyed(checkout, key):
    checkout["idempotency_key"] = key


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer places the order")
@when("the customer places the order again")
def customer_places_order(checkout, outcome):
    try:
        outcome["confirmations"].append(
            place_order(
                customer=checkout["customer"],
                items=checkout["items"],
                terms_accepted=checkout["terms_accepted"],
                idempotency_key=checkout["idempotency_key"],
            )
        )
    except CheckoutError as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is pending")
def order_is_pending(outcome):
    assert outcome["confirmations"][-1].status == "pending"


@then(parsers.cfparse("the order subtotal is {amount:f}"))
def order_subtotal(outcome, amount):
    assert outcome["confirmations"][-1].subtotal == amount


@then(parsers.cfparse("the shipping fee is {amount:f}"))
def shipping_fee(outcome, amount):
    assert outcome["confirmations"][-1].shipping_fee == amount


@then(parsers.cfparse("the order total is {amount:f}"))
def order_total(outcome, amount):
    assert outcome["confirmations"][-1].total == amount


@then(parsers.cfparse('the order has a tracking code starting with "{prefix}"'))
def tracking_code_prefix(outcome, prefix):
    assert outcome["confirmations"][-1].tracking_code.startswith(prefix)


@then(parsers.cfparse('the checkout is rejected with "{code}"'))
def checkout_rejected(outcome, code):
    assert outcome["error"] is not None
    assert outcome["error"].code == code


@then("both submissions return the same order")
def same_order(outcome):
    first, second = outcome["confirmations"]
    assert first.order_id == second.order_id
