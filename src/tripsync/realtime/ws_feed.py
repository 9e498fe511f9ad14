"""WebSocket change feed client for the API Gateway WebSocket endpoint."""

import asyncio
import json
import logging
from typing import Any

import websockets
from websockets import ConnectionClosed

from tripsync.errors import NetworkError
from tripsync.realtime.feed import ChangeCallback, ChangeEvent, ChangeFeed, ChangeFilter, Subscription

logger = logging.getLogger(__name__)


class _RemoteSubscription(Subscription):
    def __init__(self, feed: "WebSocketChangeFeed", channel: str, change_filter: ChangeFilter, callback: ChangeCallback):
        super().__init__(channel)
        self.filter = change_filter
        self.callback = callback
        self._feed = feed

    async def _release(self) -> None:
        await self._feed._unsubscribe(self)


class WebSocketChangeFeed(ChangeFeed):
    """
    Change feed over one WebSocket connection.

    The connection is opened lazily on the first subscribe and authenticated
    with the session token as a ``token`` query parameter. Subscriptions that
    share a channel share one server-side subscription.
    """

    def __init__(self, url: str, token: str | None = None) -> None:
        self.url = url
        self._token = token
        self.ws: Any = None
        self._reader: asyncio.Task | None = None
        self._channels: dict[str, list[_RemoteSubscription]] = {}

    @property
    def connected(self) -> bool:
        return self.ws is not None

    async def connect(self) -> None:
        uri = f"{self.url}?token={self._token}" if self._token else self.url
        try:
            self.ws = await websockets.connect(uri)
        except (OSError, websockets.InvalidStatus) as e:
            raise NetworkError(f"Change feed connection failed: {e}") from e
        self._reader = asyncio.create_task(self._listen())
        logger.info("Connected to change feed %s", self.url)

    async def subscribe(self, channel: str, change_filter: ChangeFilter, callback: ChangeCallback) -> Subscription:
        if self.ws is None:
            await self.connect()

        sub = _RemoteSubscription(self, channel, change_filter, callback)
        first = channel not in self._channels
        self._channels.setdefault(channel, []).append(sub)
        if first:
            await self._send(
                {
                    "action": "subscribe",
                    "channel": channel,
                    "table": change_filter.table,
                    "filter": change_filter.expression,
                }
            )
        return sub

    async def _unsubscribe(self, sub: _RemoteSubscription) -> None:
        subs = self._channels.get(sub.channel, [])
        if sub in subs:
            subs.remove(sub)
        if subs:
            return
        self._channels.pop(sub.channel, None)
        if self.ws is not None:
            try:
                await self._send({"action": "unsubscribe", "channel": sub.channel})
            except ConnectionClosed:
                logger.debug("Connection closed before unsubscribing %s", sub.channel)

    async def _send(self, message: dict[str, Any]) -> None:
        await self.ws.send(json.dumps(message))

    async def _listen(self) -> None:
        try:
            async for raw in self.ws:
                self.dispatch(raw)
        except ConnectionClosed:
            logger.info("Change feed connection closed")
        finally:
            self.ws = None
            self._drop_subscriptions()

    def _drop_subscriptions(self) -> None:
        orphaned = [sub for subs in self._channels.values() for sub in subs]
        self._channels.clear()
        for sub in orphaned:
            sub.detach()
        if orphaned:
            logger.warning(
                "Change feed connection lost with %d open subscription(s); they will receive no further changes",
                len(orphaned),
            )

    def dispatch(self, raw: str | bytes) -> int:
        """Route one server message to matching subscriptions; returns deliveries."""
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed change feed message")
            return 0

        if message.get("type") != "change":
            return 0

        event = ChangeEvent.from_message(message)
        delivered = 0
        for sub in list(self._channels.get(message.get("channel", ""), [])):
            if sub.active and sub.filter.matches(event):
                sub.callback(event)
                delivered += 1
        return delivered

    async def close(self) -> None:
        for subs in list(self._channels.values()):
            for sub in list(subs):
                await sub.close()
        if self.ws is not None:
            await self.ws.close()
        if self._reader is not None:
            await asyncio.wait({self._reader})
            self._reader = None
