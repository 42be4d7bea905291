"""Repository for the Order aggregate.

Adds the lookups the storefront and admin screens need on top of the
standard ``add``/``get`` operations.
"""

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.identity import normalize_tracking_code


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_by_order_id(self, order_id: str) -> Order | None:
        results = self._dao.query.filter(order_id=order_id).all().items
        return results[0] if results else None

    def find_by_tracking_code(self, tracking_code: str) -> Order | None:
        """Case-insensitive lookup by tracking code."""
        code = normalize_tracking_code(tracking_code)
        if not code:
            return None
        results = self._dao.query.filter(tracking_code=code).all().items
        return results[0] if results else None

    def find_by_idempotency_key(self, idempotency_key: str) -> Order | None:
        if not idempotency_key:
            return None
        results = self._dao.query.filter(idempotency_key=idempotency_key).all().items
        return results[0] if results else None

    def list_recent(self, limit: int = 50, status: str | None = None) -> list[Order]:
        """Most recently placed orders first, optionally for one status."""
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").limit(limit).all().items

    def iter_all(self, page_size: int = 100):
        """Yield every order, oldest first, a page at a time."""
        offset = 0
        while True:
            page = self._dao.query.order_by("created_at").offset(offset).limit(page_size).all().items
            yield from page
            if len(page) < page_size:
                return
            offset += page_size
