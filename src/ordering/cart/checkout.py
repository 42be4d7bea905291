"""Cart checkout — turn a session cart into a cash-on-delivery order.

The order is stored first; the cart is cleared only afterwards. A failure
while clearing is reported through ``cart_cleared=False`` and never hides
the stored order. Retrying with the same idempotency key returns the same
order and tries the clear again.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.management import ClearCart
from ordering.order.placement import OrderConfirmation, place_order

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    confirmation: OrderConfirmation
    cart_cleared: bool


def checkout_cart(
    cart_id: str,
    customer: dict,
    terms_accepted: bool,
    notes: str | None = None,
    idempotency_key: str | None = None,
) -> CheckoutResult:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)

    confirmation = place_order(
        customer=customer,
        items=cart.line_items(),
        terms_accepted=terms_accepted,
        notes=notes,
        idempotency_key=idempotency_key,
    )

    # Already cleared for this order; items added since belong to the next one
    if cart.last_order_id == confirmation.order_id:
        return CheckoutResult(confirmation=confirmation, cart_cleared=True)

    try:
        current_domain.process(
            ClearCart(cart_id=cart_id, order_id=confirmation.order_id),
            asynchronous=False,
        )
    except Exception as exc:
        logger.error(
            "Cart could not be cleared after checkout",
            cart_id=cart_id,
            order_id=confirmation.order_id,
            error=str(exc),
        )
        return CheckoutResult(confirmation=confirmation, cart_cleared=False)

    return CheckoutResult(confirmation=confirmation, cart_cleared=True)
