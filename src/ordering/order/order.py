"""Order aggregate — the core of the ordering domain.

An Order is a snapshot of a cash-on-delivery checkout: who ordered, where it
ships, which products at which prices, and what the customer owes. Line items
and pricing are captured by value at placement time and never re-read from
the live catalogue; after placement the only thing that changes is the
fulfillment status, and only through an administrator.

State Machine:
    PENDING → CONFIRMED → [PROCESSING] → SHIPPED → DELIVERED
"""

from datetime import UTC, datetime

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.errors import InvalidStatusTransition
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.history import estimated_delivery, tracking_history
from ordering.order.identity import new_order_id, new_tracking_code
from ordering.order.pricing import ShippingPolicy, to_cents
from ordering.order.status import OrderStatus, allowed

logger = structlog.get_logger(__name__)


def split_full_name(full_name: str) -> tuple[str, str | None]:
    """Split the checkout form's single name field into first and last name."""
    parts = full_name.strip().split(maxsplit=1)
    first_name = parts[0]
    last_name = parts[1] if len(parts) > 1 else None
    return first_name, last_name


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerSnapshot:
    """The customer's contact details as entered at checkout."""

    first_name = String(required=True, max_length=100)
    last_name = String(max_length=150)
    phone = String(required=True, max_length=30)
    email = String(max_length=254)


@ordering.value_object(part_of="Order")
class ShippingDestination:
    """Where the order is delivered and cash collected."""

    city = String(required=True, max_length=100)
    address = Text(required=True)


@ordering.value_object(part_of="Order")
class PricingBreakdown:
    """What the customer pays on delivery: subtotal plus shipping."""

    subtotal = Float(required=True, min_value=0.0)
    shipping_fee = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_be_subtotal_plus_shipping(self):
        if abs(self.total - (self.subtotal + self.shipping_fee)) > 0.005:
            raise ValidationError({"total": ["Total must equal subtotal plus shipping"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class LineItem:
    """A product, its price and the quantity ordered, frozen at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return to_cents(self.unit_price * self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = String(identifier=True, max_length=40)
    tracking_code = String(required=True, max_length=30)
    customer = ValueObject(CustomerSnapshot)
    shipping = ValueObject(ShippingDestination)
    items = HasMany(LineItem)
    pricing = ValueObject(PricingBreakdown)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    notes = Text()
    idempotency_key = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def subtotal_must_match_line_items(self):
        if self.pricing is None:
            return
        expected = to_cents(sum(item.unit_price * item.quantity for item in self.items))
        if abs(self.pricing.subtotal - expected) > 0.005:
            raise ValidationError({"pricing": ["Subtotal must equal the sum of line item amounts"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer,
        items_data,
        notes=None,
        idempotency_key=None,
        policy=None,
        tracking_code=None,
    ):
        """Create a new pending order from validated checkout data.

        Args:
            customer: Dict with full_name, phone, city, address and optional email.
            items_data: List of dicts with product_id, product_name, unit_price, quantity.
            notes: Free-text delivery notes.
            idempotency_key: Client nonce that identifies this checkout attempt.
            policy: ShippingPolicy to price with (defaults to the environment's).
            tracking_code: Pre-generated tracking code (defaults to a new one).
        """
        policy = policy or ShippingPolicy.from_env()
        now = datetime.now(UTC)
        first_name, last_name = split_full_name(customer["full_name"])

        line_items = [
            LineItem(
                product_id=str(item["product_id"]),
                product_name=item["product_name"].strip(),
                unit_price=to_cents(float(item["unit_price"])),
                quantity=int(item["quantity"]),
            )
            for item in items_data
        ]
        quote = policy.quote(line_items)

        order = cls(
            order_id=new_order_id(),
            tracking_code=tracking_code or new_tracking_code(),
            customer=CustomerSnapshot(
                first_name=first_name,
                last_name=last_name,
                phone=customer["phone"].strip(),
                email=(customer.get("email") or "").strip() or None,
            ),
            shipping=ShippingDestination(
                city=customer["city"].strip(),
                address=customer["address"].strip(),
            ),
            status=OrderStatus.PENDING.value,
            notes=notes or None,
            idempotency_key=idempotency_key or None,
            created_at=now,
            updated_at=now,
        )

        with atomic_change(order):
            for line_item in line_items:
                order.add_items(line_item)
            order.pricing = PricingBreakdown(
                subtotal=quote.subtotal,
                shipping_fee=quote.shipping_fee,
                total=quote.total,
            )

        order.raise_(
            OrderPlaced(
                order_id=order.order_id,
                tracking_code=order.tracking_code,
                customer_name=order.full_name,
                shipping_city=order.shipping.city,
                item_count=len(line_items),
                subtotal=quote.subtotal,
                shipping_fee=quote.shipping_fee,
                total=quote.total,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Fulfillment status
    # -------------------------------------------------------------------
    def change_status(self, new_status, changed_by, override=False):
        """Move the order to ``new_status``.

        Setting the current status again is a no-op. Transitions outside the
        forward-only table raise InvalidStatusTransition unless ``override``
        is given, in which case the change is applied and flagged on the event.

        Returns True when the status actually changed.
        """
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]}) from None

        current = OrderStatus(self.status)
        if target == current:
            return False

        is_allowed = allowed(current, target)
        if not is_allowed and not override:
            raise InvalidStatusTransition(current.value, target.value)

        if not is_allowed:
            logger.warning(
                "Order status overridden outside transition rules",
                order_id=self.order_id,
                previous_status=current.value,
                new_status=target.value,
                changed_by=changed_by,
            )

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.order_id,
                previous_status=current.value,
                new_status=target.value,
                changed_by=changed_by,
                override=not is_allowed,
                changed_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    @property
    def full_name(self) -> str:
        if self.customer.last_name:
            return f"{self.customer.first_name} {self.customer.last_name}"
        return self.customer.first_name

    @property
    def estimated_delivery(self):
        return estimated_delivery(self.created_at)

    def tracking_history(self):
        """Derived tracking timeline for the public tracking page."""
        return tracking_history(self.status, self.created_at)
