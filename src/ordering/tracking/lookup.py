"""Public order tracking by tracking code.

An unknown or blank code is an ordinary outcome (``OrderNotFound``), not an
error; failures reading the order store still propagate.
"""

from dataclasses import dataclass
from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from ordering.order.history import TrackingEvent
from ordering.order.identity import normalize_tracking_code
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TrackingResult:
    order: Order
    history: list[TrackingEvent]
    estimated_delivery: datetime


@dataclass(frozen=True)
class OrderNotFound:
    tracking_code: str


def lookup_order(tracking_code: str | None) -> TrackingResult | OrderNotFound:
    code = normalize_tracking_code(tracking_code)
    if not code:
        return OrderNotFound(tracking_code=code)

    order = current_domain.repository_for(Order).find_by_tracking_code(code)
    if order is None:
        logger.info("Tracking lookup found no order", tracking_code=code)
        return OrderNotFound(tracking_code=code)

    return TrackingResult(
        order=order,
        history=order.tracking_history(),
        estimated_delivery=order.estimated_delivery,
    )
