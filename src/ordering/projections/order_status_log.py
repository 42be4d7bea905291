"""Order status log — append-only record of when each transition really happened.

The public tracking history is derived from the current status; this log is
the audit trail administrators read instead, including flagged overrides.
"""

import uuid

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.order import Order
from ordering.order.status import OrderStatus


@ordering.projection
class OrderStatusLog:
    entry_id = Identifier(identifier=True, required=True)
    order_id = String(required=True, max_length=40)
    previous_status = String(max_length=20)
    new_status = String(required=True, max_length=20)
    changed_by = String(required=True, max_length=100)
    override = Boolean(default=False)
    occurred_at = DateTime(required=True)


def _add_entry(order_id, previous_status, new_status, changed_by, occurred_at, override=False):
    current_domain.repository_for(OrderStatusLog).add(
        OrderStatusLog(
            entry_id=str(uuid.uuid4()),
            order_id=order_id,
            previous_status=previous_status,
            new_status=new_status,
            changed_by=changed_by,
            override=override,
            occurred_at=occurred_at,
        )
    )


def entries_for(order_id: str) -> list[OrderStatusLog]:
    """Log entries for one order, oldest first."""
    repo = current_domain.repository_for(OrderStatusLog)
    return repo._dao.query.filter(order_id=order_id).order_by("occurred_at").all().items


@ordering.projector(projector_for=OrderStatusLog, aggregates=[Order])
class OrderStatusLogProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        _add_entry(
            str(event.order_id),
            None,
            OrderStatus.PENDING.value,
            "customer",
            event.created_at,
        )

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        _add_entry(
            str(event.order_id),
            event.previous_status,
            event.new_status,
            event.changed_by,
            event.changed_at,
            override=event.override,
        )
