"""Tests for checkout input validation and its error order."""

import pytest
from ordering.order.errors import (
    CheckoutError,
    EmptyCart,
    InvalidLineItem,
    InvalidPhone,
    MissingField,
    TermsNotAccepted,
)
from ordering.order.validation import is_valid_phone, validate_checkout
from protean.exceptions import ValidationError

ITEMS = [{"product_id": "p-1", "product_name": "Lamp", "unit_price": 12.5, "quantity": 1}]


def _customer(**overrides):
    customer = {
        "full_name": "Amina Yusuf",
        "phone": "+234 801 234 5678",
        "city": "Lagos",
        "address": "12 Marina Road",
    }
    customer.update(overrides)
    return customer


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["full_name", "phone", "city", "address"])
    def test_missing_field(self, field):
        with pytest.raises(MissingField) as exc:
            validate_checkout(_customer(**{field: None}), ITEMS, True)
        assert exc.value.field == field
        assert exc.value.code == "missing_field"

    def test_blank_counts_as_missing(self):
        with pytest.raises(MissingField) as exc:
            validate_checkout(_customer(city="   "), ITEMS, True)
        assert exc.value.field == "city"

    def test_fields_checked_in_order(self):
        with pytest.raises(MissingField) as exc:
            validate_checkout(_customer(full_name="", address=""), ITEMS, True)
        assert exc.value.field == "full_name"


class TestPhone:
    @pytest.mark.parametrize("phone", ["+1 (555) 123-4567", "0801234567", "555 123 4567"])
    def test_valid_numbers(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["12345", "call me maybe", "+1-555-ABC-4567"])
    def test_invalid_numbers(self, phone):
        assert not is_valid_phone(phone)

    def test_invalid_phone_raises(self):
        with pytest.raises(InvalidPhone):
            validate_checkout(_customer(phone="12345"), ITEMS, True)


class TestErrorOrder:
    def test_phone_checked_before_terms(self):
        with pytest.raises(InvalidPhone):
            validate_checkout(_customer(phone="12"), ITEMS, False)

    def test_terms_checked_before_empty_cart(self):
        with pytest.raises(TermsNotAccepted):
            validate_checkout(_customer(), [], False)

    def test_empty_cart(self):
        with pytest.raises(EmptyCart) as exc:
            validate_checkout(_customer(), [], True)
        assert exc.value.code == "empty_cart"


class TestLineItems:
    @pytest.mark.parametrize(
        "override",
        [
            {"quantity": 0},
            {"unit_price": -1},
            {"product_name": ""},
            {"product_id": None},
            {"quantity": "many"},
        ],
    )
    def test_malformed_line_item(self, override):
        item = {**ITEMS[0], **override}
        with pytest.raises(InvalidLineItem) as exc:
            validate_checkout(_customer(), [ITEMS[0], item], True)
        assert exc.value.position == 1

    def test_valid_checkout_passes(self):
        validate_checkout(_customer(), ITEMS, True)


class TestErrorHierarchy:
    def test_checkout_errors_are_validation_errors(self):
        error = TermsNotAccepted()
        assert isinstance(error, CheckoutError)
        assert isinstance(error, ValidationError)
        assert error.messages == {"terms_accepted": ["Please agree to the terms and conditions to continue."]}
