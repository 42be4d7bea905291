"""Order fulfillment — the administrator's status update command and handler."""

from protean import handle
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    """Move an order along pending → confirmed → [processing] → shipped → delivered.

    ``override`` lets an administrator correct a status outside the
    forward-only rules; the change is flagged in the status log.
    """

    order_id = String(required=True, max_length=40)
    status = String(required=True, max_length=20)
    changed_by = String(required=True, max_length=100)
    override = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        changed = order.change_status(
            command.status,
            changed_by=command.changed_by,
            override=bool(command.override),
        )
        if changed:
            repo.add(order)
        return changed
