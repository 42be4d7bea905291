import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from catalogue.channel import CatalogChangeChannel, Operation, Topic


@pytest.fixture
def channel():
    return CatalogChangeChannel()


class TestSubscriptions:
    def test_default_subscription_covers_all_topics(self, channel):
        subscription = channel.subscribe()
        assert subscription.topics == frozenset(Topic)

    def test_unknown_topic_rejected(self, channel):
        with pytest.raises(ValueError):
            channel.subscribe(["orders"])

    def test_unsubscribe(self, channel):
        subscription = channel.subscribe()
        channel.unsubscribe(subscription)
        assert channel.subscriber_count == 0
        assert subscription.active is False
        assert channel.publish(Topic.PRODUCTS, Operation.INSERT) == 0


class TestPublish:
    def test_delivers_topic_and_operation(self, channel):
        subscription = channel.subscribe()
        channel.publish("products", "update")
        change = subscription.get(timeout=0)
        assert (change.topic, change.operation) == (Topic.PRODUCTS, Operation.UPDATE)

    def test_only_matching_topic(self, channel):
        products_only = channel.subscribe(["products"])
        assert channel.publish(Topic.CATEGORIES, Operation.DELETE) == 0
        assert products_only.drain() == []

    def test_every_subscriber_receives(self, channel):
        subscriptions = [channel.subscribe() for _ in range(3)]
        assert channel.publish(Topic.CATEGORIES, Operation.INSERT) == 3
        assert all(len(s.drain()) == 1 for s in subscriptions)

    def test_changes_before_subscribing_not_delivered(self, channel):
        channel.publish(Topic.PRODUCTS, Operation.INSERT)
        late = channel.subscribe()
        assert late.get(timeout=0) is None

    def test_changes_arrive_in_publish_order(self, channel):
        subscription = channel.subscribe()
        for operation in (Operation.INSERT, Operation.UPDATE, Operation.DELETE):
            channel.publish(Topic.PRODUCTS, operation)
        assert [c.operation for c in subscription.drain()] == [Operation.INSERT, Operation.UPDATE, Operation.DELETE]

    def test_to_dict(self, channel):
        subscription = channel.subscribe()
        channel.publish(Topic.PRODUCTS, Operation.DELETE)
        payload = subscription.get(timeout=0).to_dict()
        assert payload["topic"] == "products"
        assert payload["operation"] == "delete"
        assert "occurred_at" in payload

    def test_waiting_reader_wakes_on_publish(self, channel):
        subscription = channel.subscribe()
        received = []
        reader = threading.Thread(target=lambda: received.append(subscription.get(timeout=5)))
        reader.start()
        channel.publish(Topic.CATEGORIES, Operation.UPDATE)
        reader.join(timeout=5)
        assert received[0].topic == Topic.CATEGORIES


class TestLoopBoundSubscriptions:
    def test_idle_readers_do_not_block_other_topics(self, channel):
        async def scenario():
            loop = asyncio.get_running_loop()
            loop.set_default_executor(ThreadPoolExecutor(max_workers=1))

            idle = [channel.subscribe(["categories"], loop=loop) for _ in range(3)]
            idle_waits = [asyncio.create_task(s.next_change(5)) for s in idle]
            products = channel.subscribe(["products"], loop=loop)
            reader = asyncio.create_task(products.next_change(2))
            await asyncio.sleep(0)

            # Published from a worker thread, as a sync route handler would
            await loop.run_in_executor(None, channel.publish, "products", "update")
            change = await reader

            for task in idle_waits:
                task.cancel()
            await asyncio.gather(*idle_waits, return_exceptions=True)
            return change

        change = asyncio.run(scenario())
        assert (change.topic, change.operation) == (Topic.PRODUCTS, Operation.UPDATE)

    def test_next_change_times_out_with_none(self, channel):
        async def scenario():
            subscription = channel.subscribe(loop=asyncio.get_running_loop())
            return await subscription.next_change(0.01)

        assert asyncio.run(scenario()) is None

    def test_publish_from_the_loop_thread(self, channel):
        async def scenario():
            subscription = channel.subscribe(["categories"], loop=asyncio.get_running_loop())
            channel.publish(Topic.CATEGORIES, Operation.DELETE)
            return await subscription.next_change(1)

        assert asyncio.run(scenario()).operation == Operation.DELETE

    def test_unbound_subscription_cannot_be_awaited(self, channel):
        subscription = channel.subscribe()
        with pytest.raises(RuntimeError):
            asyncio.run(subscription.next_change(0))
