"""A storefront visitor's view of the catalogue, kept fresh by the change channel.

Collections are fetched on first read. When a change for a collection's
topic arrives, the cached copy is dropped and the next read fetches again.
"""

import structlog

from catalogue.channel import Topic, get_channel
from catalogue.queries import list_categories, list_products

logger = structlog.get_logger(__name__)


class StorefrontSession:
    def __init__(self, channel=None):
        self._channel = channel or get_channel()
        self._subscription = self._channel.subscribe()
        self._loaders = {
            Topic.PRODUCTS: list_products,
            Topic.CATEGORIES: list_categories,
        }
        self._cache: dict[Topic, list] = {}

    def _refresh_stale(self) -> None:
        for change in self._subscription.drain():
            if self._cache.pop(change.topic, None) is not None:
                logger.debug("Storefront collection marked stale", topic=change.topic.value)

    def _read(self, topic: Topic) -> list:
        self._refresh_stale()
        if topic not in self._cache:
            self._cache[topic] = self._loaders[topic]()
        return self._cache[topic]

    def products(self):
        return self._read(Topic.PRODUCTS)

    def categories(self):
        return self._read(Topic.CATEGORIES)

    def close(self) -> None:
        self._channel.unsubscribe(self._subscription)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
