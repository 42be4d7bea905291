"""Checkout input validation, run before anything is priced or stored.

Checks run in a fixed order and stop at the first failure:
    1. required customer fields present   → MissingField(field)
    2. phone number shape                 → InvalidPhone
    3. terms and conditions accepted      → TermsNotAccepted
    4. at least one line item             → EmptyCart
Line items are then checked individually (InvalidLineItem).
"""

import re

from ordering.order.errors import (
    EmptyCart,
    InvalidLineItem,
    InvalidPhone,
    MissingField,
    TermsNotAccepted,
)

REQUIRED_CUSTOMER_FIELDS = ("full_name", "phone", "city", "address")

# Digits, spaces, hyphens, parentheses, optional leading +; at least 10 characters
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{10,}$")


def is_valid_phone(phone: str) -> bool:
    return bool(_PHONE_PATTERN.match(phone.strip()))


def validate_line_items(items: list[dict]) -> None:
    for position, item in enumerate(items):
        if not str(item.get("product_id") or "").strip():
            raise InvalidLineItem(position, "product id is required")
        if not str(item.get("product_name") or "").strip():
            raise InvalidLineItem(position, "product name is required")
        try:
            quantity = int(item.get("quantity"))
            unit_price = float(item.get("unit_price"))
        except (TypeError, ValueError):
            raise InvalidLineItem(position, "quantity and unit price must be numbers") from None
        if quantity < 1:
            raise InvalidLineItem(position, "quantity must be at least 1")
        if unit_price < 0:
            raise InvalidLineItem(position, "unit price cannot be negative")


def validate_checkout(customer: dict, items: list[dict], terms_accepted: bool) -> None:
    """Raise the first applicable ``CheckoutError`` for this checkout input."""
    for field in REQUIRED_CUSTOMER_FIELDS:
        if not str(customer.get(field) or "").strip():
            raise MissingField(field)

    if not is_valid_phone(customer["phone"]):
        raise InvalidPhone()

    if not terms_accepted:
        raise TermsNotAccepted()

    if not items:
        raise EmptyCart()

    validate_line_items(items)
