"""Order status vocabulary and transition rules.

State Machine (5 states):
    PENDING → CONFIRMED → [PROCESSING] → SHIPPED → DELIVERED

PROCESSING is optional: a confirmed order may go straight to SHIPPED.
Transitions only move forward one stage at a time; DELIVERED is terminal.
Administrators can still force a correction with an explicit override,
which is recorded on the resulting event (see ``Order.change_status``).
"""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


# Position of each status along the fulfillment pipeline
_STATUS_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.CONFIRMED: 1,
    OrderStatus.PROCESSING: 2,
    OrderStatus.SHIPPED: 3,
    OrderStatus.DELIVERED: 4,
}

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.SHIPPED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


def rank(status: OrderStatus | str) -> int:
    """Return the pipeline position of ``status`` (0 for pending)."""
    return _STATUS_RANK[OrderStatus(status)]


def allowed(current: OrderStatus | str, target: OrderStatus | str) -> bool:
    """Whether an order may move from ``current`` to ``target`` without an override."""
    return OrderStatus(target) in _VALID_TRANSITIONS[OrderStatus(current)]


def next_statuses(current: OrderStatus | str) -> list[OrderStatus]:
    """Statuses reachable from ``current``, in pipeline order."""
    return sorted(_VALID_TRANSITIONS[OrderStatus(current)], key=rank)
