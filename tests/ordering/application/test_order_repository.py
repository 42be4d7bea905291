from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.order import Order
from protean import current_domain

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def store_orders(customer, line_items):
    """Store ``count`` orders one hour apart, oldest first."""

    def _store(count, status="pending"):
        repo = current_domain.repository_for(Order)
        orders = []
        for index in range(count):
            order = Order.place(customer=customer, items_data=line_items)
            order.created_at = BASE_TIME + timedelta(hours=index)
            order.status = status
            repo.add(order)
            orders.append(order)
        return orders

    return _store


class TestFinders:
    def test_find_by_tracking_code_normalizes(self, store_orders):
        (order,) = store_orders(1)
        repo = current_domain.repository_for(Order)
        assert repo.find_by_tracking_code(order.tracking_code.lower()).order_id == order.order_id

    def test_find_by_tracking_code_blank(self):
        assert current_domain.repository_for(Order).find_by_tracking_code("") is None

    def test_find_by_idempotency_key_missing(self):
        assert current_domain.repository_for(Order).find_by_idempotency_key("nope") is None

    def test_find_by_order_id(self, store_orders):
        (order,) = store_orders(1)
        repo = current_domain.repository_for(Order)
        assert repo.find_by_order_id(order.order_id).tracking_code == order.tracking_code
        assert repo.find_by_order_id("ORDER-0-MISSING") is None


class TestListing:
    def test_list_recent_newest_first(self, store_orders):
        orders = store_orders(3)
        recent = current_domain.repository_for(Order).list_recent()
        assert [o.order_id for o in recent] == [o.order_id for o in reversed(orders)]

    def test_list_recent_limit(self, store_orders):
        store_orders(5)
        assert len(current_domain.repository_for(Order).list_recent(limit=2)) == 2

    def test_list_recent_by_status(self, store_orders):
        store_orders(2)
        shipped = store_orders(1, status="shipped")
        recent = current_domain.repository_for(Order).list_recent(status="shipped")
        assert [o.order_id for o in recent] == [shipped[0].order_id]

    def test_iter_all_pages_through_every_order(self, store_orders):
        orders = store_orders(7)
        seen = [o.order_id for o in current_domain.repository_for(Order).iter_all(page_size=3)]
        assert seen == [o.order_id for o in orders]
