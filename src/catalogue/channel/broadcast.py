"""In-process broadcast of catalogue changes to storefront sessions.

A change carries only what changed (topic and operation) and when; readers
refetch the data themselves. Every subscription has its own unbounded queue,
so publishing never waits on a slow reader.
"""

import asyncio
import queue
import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class Topic(Enum):
    PRODUCTS = "products"
    CATEGORIES = "categories"


class Operation(Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class CatalogChange:
    topic: Topic
    operation: Operation
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        return {
            "topic": self.topic.value,
            "operation": self.operation.value,
            "occurred_at": self.occurred_at.isoformat(),
        }


class Subscription:
    """A reader's handle on the channel. Receives changes for its topics only.

    Subscriptions bound to an event loop queue changes on that loop, so async
    readers await ``next_change`` without holding a worker thread. Unbound
    subscriptions are read from any thread with ``get`` and ``drain``.
    """

    def __init__(self, topics, loop: asyncio.AbstractEventLoop | None = None):
        self.id = str(uuid.uuid4())
        self.topics = frozenset(topics)
        self._loop = loop
        self._queue = asyncio.Queue() if loop is not None else queue.SimpleQueue()
        self.active = True

    def deliver(self, change: CatalogChange) -> None:
        if self._loop is None:
            self._queue.put_nowait(change)
        elif not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._queue.put_nowait, change)

    def get(self, timeout: float | None = None) -> CatalogChange | None:
        """Wait up to ``timeout`` seconds for the next change."""
        if self._loop is not None:
            raise RuntimeError("Loop-bound subscriptions are read with next_change()")
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    async def next_change(self, timeout: float | None = None) -> CatalogChange | None:
        """Await the next change for up to ``timeout`` seconds; None when it elapses."""
        if self._loop is None:
            raise RuntimeError("Only loop-bound subscriptions can be awaited")
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None

    def drain(self) -> list[CatalogChange]:
        """Return every change received so far without waiting."""
        changes = []
        while True:
            try:
                changes.append(self._queue.get_nowait())
            except (queue.Empty, asyncio.QueueEmpty):
                return changes


class CatalogChangeChannel:
    def __init__(self):
        self._subscriptions: dict[str, Subscription] = {}
        self._lock = threading.Lock()

    def subscribe(self, topics=None, loop: asyncio.AbstractEventLoop | None = None) -> Subscription:
        """Start receiving changes for ``topics`` (all topics by default).

        Pass the running ``loop`` to read the subscription with ``next_change``.
        Changes published before this call are never delivered.
        """
        wanted = [Topic(topic) for topic in topics] if topics else list(Topic)
        subscription = Subscription(wanted, loop=loop)
        with self._lock:
            self._subscriptions[subscription.id] = subscription
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.pop(subscription.id, None)
        subscription.active = False

    def publish(self, topic, operation) -> int:
        """Deliver a change to every matching subscriber; return how many were reached."""
        change = CatalogChange(topic=Topic(topic), operation=Operation(operation))
        with self._lock:
            recipients = [s for s in self._subscriptions.values() if change.topic in s.topics]

        for subscription in recipients:
            subscription.deliver(change)

        logger.debug(
            "Catalog change published",
            topic=change.topic.value,
            operation=change.operation.value,
            subscribers=len(recipients),
        )
        return len(recipients)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)
