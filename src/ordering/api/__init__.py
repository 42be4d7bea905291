"""Ordering domain API package."""

from ordering.api.routes import analytics_router, cart_router, order_router, tracking_router

__all__ = ["cart_router", "order_router", "tracking_router", "analytics_router"]
