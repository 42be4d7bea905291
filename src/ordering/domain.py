"""Ordering bounded context — checkout, order lifecycle, tracking and sales analytics.

Handles cash-on-delivery order placement from a session cart, the admin-driven
fulfillment status lifecycle, public tracking-code lookups and the dashboard
analytics computed from order history.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
