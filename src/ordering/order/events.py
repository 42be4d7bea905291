"""Domain events for the Order aggregate.

Events are immutable facts raised by the aggregate and dispatched after the
unit of work commits. They feed the ``OrderStatusLog`` projection, which is
the only persisted record of when a transition actually happened.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed a cash-on-delivery order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_code = String(required=True)
    customer_name = String(required=True)
    shipping_city = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    shipping_fee = Float(required=True)
    total = Float(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order to a new fulfillment status.

    ``override`` is set when the change bypassed the forward-only
    transition rules (a manual correction).
    """

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = String(required=True)
    override = Boolean(default=False)
    changed_at = DateTime(required=True)
