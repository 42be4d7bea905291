"""Customer-facing tracking history, derived from the stored status.

No event log backs this view: each stage is shown once the order has reached
it, stamped at a fixed offset from the order's creation time. Moving an order
backwards (admin override) immediately shrinks the visible history. For the
real transition times see the ``OrderStatusLog`` projection.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from ordering.order.status import OrderStatus, rank

DELIVERY_OFFSET = timedelta(days=5)


@dataclass(frozen=True)
class TrackingEvent:
    """One stage of the tracking timeline shown on the public tracking page."""

    status: str
    occurred_at: datetime
    description: str


# (label, offset from creation, status that reveals the stage, description)
_TRACKING_STAGES = (
    (
        "Order Placed",
        timedelta(0),
        OrderStatus.PENDING,
        "Your order has been received and is being processed.",
    ),
    (
        "Order Confirmed",
        timedelta(hours=2),
        OrderStatus.CONFIRMED,
        "Your order has been confirmed and is being prepared.",
    ),
    (
        "Processing",
        timedelta(hours=6),
        OrderStatus.PROCESSING,
        "Your items are being prepared for shipment.",
    ),
    (
        "Shipped",
        timedelta(hours=24),
        OrderStatus.SHIPPED,
        "Your order is on its way to you.",
    ),
    (
        "Delivered",
        DELIVERY_OFFSET,
        OrderStatus.DELIVERED,
        "Your order has been delivered successfully.",
    ),
)


def tracking_history(status: OrderStatus | str, created_at: datetime) -> list[TrackingEvent]:
    """Return the ordered tracking events visible for an order in ``status``."""
    current_rank = rank(status)
    return [
        TrackingEvent(status=label, occurred_at=created_at + offset, description=description)
        for label, offset, stage_status, description in _TRACKING_STAGES
        if current_rank >= rank(stage_status)
    ]


def estimated_delivery(created_at: datetime) -> datetime:
    return created_at + DELIVERY_OFFSET
