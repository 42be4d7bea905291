"""Order placement — command, handler and the checkout-facing service.

``place_order`` is what the API and the cart checkout call. It serialises
submissions that share an idempotency key, answers repeats with the order
already stored, and reports any storage failure as ``OrderPersistenceError``
so callers never mistake a failed write for a confirmation.
"""

import json
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.errors import OrderPersistenceError
from ordering.order.identity import new_tracking_code
from ordering.order.order import Order
from ordering.order.validation import validate_checkout

logger = structlog.get_logger(__name__)

_TRACKING_CODE_ATTEMPTS = 5


@ordering.command(part_of="Order")
class PlaceOrder:
    full_name = String(max_length=200)
    phone = String(max_length=30)
    city = String(max_length=100)
    address = Text()
    email = String(max_length=254)
    notes = Text()
    items = Text()  # JSON: list of line item dicts
    terms_accepted = Boolean(default=False)
    idempotency_key = String(max_length=100)


@dataclass(frozen=True)
class OrderConfirmation:
    """What the customer sees after a successful checkout."""

    order_id: str
    tracking_code: str
    subtotal: float
    shipping_fee: float
    total: float
    status: str
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderConfirmation":
        return cls(
            order_id=order.order_id,
            tracking_code=order.tracking_code,
            subtotal=order.pricing.subtotal,
            shipping_fee=order.pricing.shipping_fee,
            total=order.pricing.total,
            status=order.status,
            created_at=order.created_at,
        )


def _unused_tracking_code(repo) -> str:
    for _ in range(_TRACKING_CODE_ATTEMPTS):
        code = new_tracking_code()
        if repo.find_by_tracking_code(code) is None:
            return code
        logger.warning("Tracking code collision, regenerating", tracking_code=code)
    raise RuntimeError(f"No unused tracking code after {_TRACKING_CODE_ATTEMPTS} attempts")


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        customer = {
            "full_name": command.full_name,
            "phone": command.phone,
            "city": command.city,
            "address": command.address,
            "email": command.email,
        }
        items_data = json.loads(command.items) if command.items else []
        if not isinstance(items_data, list):
            raise ValidationError({"items": ["Items must be a list"]})

        validate_checkout(customer, items_data, command.terms_accepted)

        repo = current_domain.repository_for(Order)
        if command.idempotency_key:
            existing = repo.find_by_idempotency_key(command.idempotency_key)
            if existing is not None:
                return existing.order_id

        order = Order.place(
            customer=customer,
            items_data=items_data,
            notes=command.notes,
            idempotency_key=command.idempotency_key,
            tracking_code=_unused_tracking_code(repo),
        )
        repo.add(order)

        logger.info(
            "Order placed",
            order_id=order.order_id,
            tracking_code=order.tracking_code,
            item_count=len(items_data),
            total=order.pricing.total,
        )
        return order.order_id


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------
_key_locks: dict[str, list] = {}
_key_locks_guard = threading.Lock()


@contextmanager
def _serialized(idempotency_key):
    """Hold a per-key lock so concurrent submissions of one checkout run one at a time."""
    if not idempotency_key:
        yield
        return

    with _key_locks_guard:
        entry = _key_locks.setdefault(idempotency_key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _key_locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _key_locks[idempotency_key]


def place_order(
    customer: dict,
    items: list[dict],
    terms_accepted: bool,
    notes: str | None = None,
    idempotency_key: str | None = None,
) -> OrderConfirmation:
    """Validate, price and store a new order, or return the one already
    stored for ``idempotency_key``.

    Raises:
        CheckoutError: the checkout input was rejected.
        OrderPersistenceError: the order could not be stored.
    """
    with _serialized(idempotency_key):
        repo = current_domain.repository_for(Order)
        try:
            if idempotency_key:
                existing = repo.find_by_idempotency_key(idempotency_key)
                if existing is not None:
                    logger.info(
                        "Repeated checkout answered with stored order",
                        order_id=existing.order_id,
                        idempotency_key=idempotency_key,
                    )
                    return OrderConfirmation.from_order(existing)

            command = PlaceOrder(
                full_name=customer.get("full_name"),
                phone=customer.get("phone"),
                city=customer.get("city"),
                address=customer.get("address"),
                email=customer.get("email"),
                notes=notes,
                items=json.dumps(items),
                terms_accepted=bool(terms_accepted),
                idempotency_key=idempotency_key,
            )
            order_id = current_domain.process(command, asynchronous=False)
            order = repo.get(order_id)
        except ValidationError:
            raise
        except Exception as exc:
            logger.error(
                "Order could not be persisted",
                idempotency_key=idempotency_key,
                error=str(exc),
                exc_info=True,
            )
            raise OrderPersistenceError(str(exc)) from exc

    return OrderConfirmation.from_order(order)
