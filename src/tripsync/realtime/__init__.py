"""
Client-side real-time data layer: change feeds and live-synced collections.
"""

from tripsync.realtime.adapters import ADAPTERS, EntityAdapter, live_collection
from tripsync.realtime.collection import CollectionState, CollectionStatus, LiveCollection
from tripsync.realtime.feed import (
    ChangeEvent,
    ChangeFeed,
    ChangeFilter,
    ChangeKind,
    ChannelSpec,
    InMemoryChangeFeed,
    Subscription,
)
from tripsync.realtime.ws_feed import WebSocketChangeFeed

__all__ = [
    "ADAPTERS",
    "ChangeEvent",
    "ChangeFeed",
    "ChangeFilter",
    "ChangeKind",
    "ChannelSpec",
    "CollectionState",
    "CollectionStatus",
    "EntityAdapter",
    "InMemoryChangeFeed",
    "LiveCollection",
    "Subscription",
    "WebSocketChangeFeed",
    "live_collection",
]
