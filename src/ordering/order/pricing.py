"""Checkout pricing: subtotal, flat-rate shipping with a free-shipping threshold, total.

Amounts are kept as floats rounded to cents, the same way prices are stored
on the catalogue side.

Settings (environment):
    STOREFRONT_FREE_SHIPPING_THRESHOLD  subtotal that waives shipping (default 50.00)
    STOREFRONT_FLAT_SHIPPING_FEE        fee charged below the threshold (default 9.99)
"""

import os
from dataclasses import dataclass

DEFAULT_FREE_SHIPPING_THRESHOLD = 50.0
DEFAULT_FLAT_SHIPPING_FEE = 9.99


def to_cents(amount: float) -> float:
    return round(float(amount), 2)


@dataclass(frozen=True)
class Quote:
    """Result of pricing a set of line items."""

    subtotal: float
    shipping_fee: float
    total: float


@dataclass(frozen=True)
class ShippingPolicy:
    free_shipping_threshold: float = DEFAULT_FREE_SHIPPING_THRESHOLD
    flat_fee: float = DEFAULT_FLAT_SHIPPING_FEE

    @classmethod
    def from_env(cls) -> "ShippingPolicy":
        return cls(
            free_shipping_threshold=float(
                os.environ.get("STOREFRONT_FREE_SHIPPING_THRESHOLD", DEFAULT_FREE_SHIPPING_THRESHOLD)
            ),
            flat_fee=float(os.environ.get("STOREFRONT_FLAT_SHIPPING_FEE", DEFAULT_FLAT_SHIPPING_FEE)),
        )

    def shipping_for(self, subtotal: float) -> float:
        if subtotal >= self.free_shipping_threshold:
            return 0.0
        return to_cents(self.flat_fee)

    def quote(self, line_items) -> Quote:
        """Price ``line_items`` (objects exposing ``unit_price`` and ``quantity``)."""
        subtotal = to_cents(sum(item.unit_price * item.quantity for item in line_items))
        shipping_fee = self.shipping_for(subtotal)
        return Quote(
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=to_cents(subtotal + shipping_fee),
        )
