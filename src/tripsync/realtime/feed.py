"""Change feed primitives shared by the server publisher and client collections.

A change feed delivers "something changed" notifications for a table,
filtered by equality predicates on the changed row. Consumers never patch
local state from the payload; they re-fetch.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    kind: ChangeKind
    record: Mapping[str, Any] = field(default_factory=dict)

    def to_message(self, channel: str) -> dict[str, Any]:
        return {
            "type": "change",
            "channel": channel,
            "table": self.table,
            "kind": self.kind.value,
            "record": dict(self.record),
        }

    @classmethod
    def from_message(cls, message: Mapping[str, Any]) -> "ChangeEvent":
        return cls(
            table=str(message["table"]),
            kind=ChangeKind(message.get("kind", ChangeKind.UPDATE.value)),
            record=dict(message.get("record") or {}),
        )


@dataclass(frozen=True)
class ChangeFilter:
    """Table name plus optional equality predicates on the changed row."""

    table: str
    equals: tuple[tuple[str, str], ...] = ()

    @classmethod
    def on(cls, table: str, **equals: str) -> "ChangeFilter":
        return cls(table=table, equals=tuple(sorted((k, str(v)) for k, v in equals.items())))

    @classmethod
    def parse(cls, table: str, expression: str | None) -> "ChangeFilter":
        """Parse the wire form ``trip_id=eq.<id>,itinerary_item_id=eq.<id>``."""
        if not expression:
            return cls(table=table)
        equals: dict[str, str] = {}
        for clause in expression.split(","):
            column, sep, value = clause.partition("=eq.")
            if not sep or not column.strip():
                raise ValueError(f"Unsupported filter clause: {clause!r}")
            equals[column.strip()] = value.strip()
        return cls.on(table, **equals)

    @property
    def expression(self) -> str:
        return ",".join(f"{column}=eq.{value}" for column, value in self.equals)

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        return all(str(event.record.get(column)) == value for column, value in self.equals)


@dataclass(frozen=True)
class ChannelSpec:
    """A named subscription: channel key (``<entity>_<tripId>``) and its filter."""

    channel: str
    filter: ChangeFilter


ChangeCallback = Callable[[ChangeEvent], None]


class Subscription(ABC):
    """Handle for one active feed subscription, owned by whoever opened it."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def close(self) -> None:
        """Release the subscription. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        await self._release()

    def detach(self) -> None:
        """Mark the subscription dead without releasing it; the feed is already gone."""
        self._active = False

    @abstractmethod
    async def _release(self) -> None: ...


class ChangeFeed(ABC):
    @abstractmethod
    async def subscribe(self, channel: str, change_filter: ChangeFilter, callback: ChangeCallback) -> Subscription: ...


class _LocalSubscription(Subscription):
    def __init__(self, feed: "InMemoryChangeFeed", channel: str, change_filter: ChangeFilter, callback: ChangeCallback):
        super().__init__(channel)
        self.filter = change_filter
        self.callback = callback
        self._feed = feed

    async def _release(self) -> None:
        self._feed._remove(self)


class InMemoryChangeFeed(ChangeFeed):
    """
    In-process change feed for local runs and tests.

    ``publish`` fans an event out to every active subscription whose filter
    matches, synchronously and in subscription order.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_LocalSubscription] = []

    async def subscribe(self, channel: str, change_filter: ChangeFilter, callback: ChangeCallback) -> Subscription:
        sub = _LocalSubscription(self, channel, change_filter, callback)
        self._subscriptions.append(sub)
        return sub

    def _remove(self, sub: _LocalSubscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)

    @property
    def active_channels(self) -> list[str]:
        return [s.channel for s in self._subscriptions]

    def publish(self, event: ChangeEvent) -> int:
        delivered = 0
        for sub in list(self._subscriptions):
            if sub.active and sub.filter.matches(event):
                sub.callback(event)
                delivered += 1
        return delivered
