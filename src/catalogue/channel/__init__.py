"""Catalogue change channel — live updates for open storefront sessions."""

from catalogue.channel.broadcast import (
    CatalogChange,
    CatalogChangeChannel,
    Operation,
    Subscription,
    Topic,
)

_channel_instance = None


def get_channel() -> CatalogChangeChannel:
    """Return the process-wide change channel (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        _channel_instance = CatalogChangeChannel()
    return _channel_instance


def reset_channel():
    """Reset the channel singleton (useful for testing)."""
    global _channel_instance
    _channel_instance = None


__all__ = [
    "CatalogChange",
    "CatalogChangeChannel",
    "Operation",
    "Subscription",
    "Topic",
    "get_channel",
    "reset_channel",
]
