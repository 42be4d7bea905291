"""Sales analytics for the admin dashboard.

``summarize`` is a pure reduction over orders; ``compute_snapshot`` feeds it
from a paged scan of the order store. Revenue counts every stored order
regardless of status, as the dashboard always has.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import UTC, datetime

from protean.utils.globals import current_domain

from ordering.order.order import Order
from ordering.order.pricing import to_cents
from ordering.order.status import OrderStatus

DEFAULT_TOP_N = 6


@dataclass(frozen=True)
class ProductSales:
    rank: int
    product_name: str
    total_quantity: int
    total_revenue: float


@dataclass(frozen=True)
class CitySales:
    rank: int
    city: str
    total_orders: int
    total_revenue: float


@dataclass(frozen=True)
class AnalyticsSnapshot:
    total_revenue: float
    total_orders: int
    avg_order_value: float
    top_products: list[ProductSales] = field(default_factory=list)
    status_counts: dict[str, int] = field(default_factory=dict)
    city_breakdown: list[CitySales] = field(default_factory=list)


def summarize(orders, top_n: int = DEFAULT_TOP_N) -> AnalyticsSnapshot:
    total_revenue = 0.0
    total_orders = 0
    status_counts = Counter({status.value: 0 for status in OrderStatus})
    quantities: dict[str, int] = defaultdict(int)
    revenues: dict[str, float] = defaultdict(float)
    # Keyed case-insensitively, labelled with the first spelling seen
    city_labels: dict[str, str] = {}
    city_orders: dict[str, int] = defaultdict(int)
    city_revenues: dict[str, float] = defaultdict(float)

    for order in orders:
        total_orders += 1
        total_revenue += order.pricing.total
        status_counts[order.status] += 1
        city = order.shipping.city.strip()
        key = city.casefold()
        city_labels.setdefault(key, city)
        city_orders[key] += 1
        city_revenues[key] += order.pricing.total
        for item in order.items:
            quantities[item.product_name] += item.quantity
            revenues[item.product_name] += item.unit_price * item.quantity

    # Revenue desc, then quantity desc, then name asc
    ranked = sorted(quantities, key=lambda name: (-to_cents(revenues[name]), -quantities[name], name))
    top_products = [
        ProductSales(
            rank=position,
            product_name=name,
            total_quantity=quantities[name],
            total_revenue=to_cents(revenues[name]),
        )
        for position, name in enumerate(ranked[: max(top_n, 0)], start=1)
    ]

    # Revenue desc, then city name asc
    ranked_cities = sorted(city_orders, key=lambda key: (-to_cents(city_revenues[key]), key))
    city_breakdown = [
        CitySales(
            rank=position,
            city=city_labels[key],
            total_orders=city_orders[key],
            total_revenue=to_cents(city_revenues[key]),
        )
        for position, key in enumerate(ranked_cities, start=1)
    ]

    return AnalyticsSnapshot(
        total_revenue=to_cents(total_revenue),
        total_orders=total_orders,
        avg_order_value=to_cents(total_revenue / total_orders) if total_orders else 0.0,
        top_products=top_products,
        status_counts=dict(status_counts),
        city_breakdown=city_breakdown,
    )


def _as_utc(value: datetime) -> datetime:
    # SQL providers hand back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def compute_snapshot(
    top_n: int = DEFAULT_TOP_N,
    since: datetime | None = None,
    until: datetime | None = None,
) -> AnalyticsSnapshot:
    """Summarize stored orders created in ``[since, until)``."""
    repo = current_domain.repository_for(Order)

    def in_window(order):
        created_at = _as_utc(order.created_at)
        if since is not None and created_at < _as_utc(since):
            return False
        if until is not None and created_at >= _as_utc(until):
            return False
        return True

    return summarize((order for order in repo.iter_all() if in_window(order)), top_n=top_n)
