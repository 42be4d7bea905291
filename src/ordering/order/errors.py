"""Failures raised by order placement and status changes.

Checkout validation failures are Protean ``ValidationError`` subclasses, so
they carry the usual ``{field: [messages]}`` payload, plus a stable ``code``
the storefront uses to pick a field-specific message.
"""

from protean.exceptions import ValidationError


class CheckoutError(ValidationError):
    """Checkout input was rejected. Nothing was persisted."""

    code = "checkout_error"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__({field: [message]})


class MissingField(CheckoutError):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(field, f"Please fill in the {field.replace('_', ' ')} field.")


class InvalidPhone(CheckoutError):
    code = "invalid_phone"

    def __init__(self):
        super().__init__("phone", "Please enter a valid phone number.")


class TermsNotAccepted(CheckoutError):
    code = "terms_not_accepted"

    def __init__(self):
        super().__init__("terms_accepted", "Please agree to the terms and conditions to continue.")


class EmptyCart(CheckoutError):
    code = "empty_cart"

    def __init__(self):
        super().__init__("items", "Your cart is empty.")


class InvalidLineItem(CheckoutError):
    code = "invalid_line_item"

    def __init__(self, position: int, reason: str):
        self.position = position
        super().__init__("items", f"Item {position + 1}: {reason}")


class InvalidStatusTransition(ValidationError):
    """An administrator asked for a status change the state machine forbids."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


class OrderPersistenceError(Exception):
    """The order could not be durably stored.

    Callers must not clear the cart or show a confirmation on this path.
    """
