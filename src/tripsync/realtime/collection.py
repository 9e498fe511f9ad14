"""
Live-synced collection: a fetched snapshot kept fresh by change notifications.

A collection subscribes to one or more change feeds, fetches once on start,
and re-fetches whenever any subscribed feed reports a change. Notifications
never patch local state. Every fetch carries a version and only the result
of the latest requested version is applied; notifications that arrive while
a fetch is in flight coalesce into one trailing fetch.

Usage:
    collection = LiveCollection(fetch_items, feed, [ChannelSpec("items_t1", ChangeFilter.on("items", trip_id="t1"))])
    await collection.start()
    ...
    await collection.stop()
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, TypeVar

from tripsync.realtime.feed import ChangeEvent, ChangeFeed, ChannelSpec, Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class CollectionState(Generic[T]):
    items: tuple[T, ...] = ()
    status: CollectionStatus = CollectionStatus.LOADING
    error: str | None = None
    version: int = 0


Fetcher = Callable[[], Awaitable[Sequence[T]]]
StateListener = Callable[[CollectionState[T]], None]


class LiveCollection(Generic[T]):
    def __init__(
        self,
        fetcher: Fetcher,
        feed: ChangeFeed,
        subscriptions: Sequence[ChannelSpec],
        on_change: StateListener | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._feed = feed
        self._specs = tuple(subscriptions)
        self._listeners: list[StateListener] = [on_change] if on_change else []
        self._state: CollectionState[T] = CollectionState()
        self._handles: list[Subscription] = []
        self._issued = 0
        self._fetched = 0
        self._task: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._started = False
        self._alive = False

    @property
    def state(self) -> CollectionState[T]:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        return self._state.items

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def channels(self) -> list[str]:
        return [h.channel for h in self._handles if h.active]

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    async def start(self) -> CollectionState[T]:
        """Subscribe to every channel, then fetch the first snapshot.

        If a subscribe fails, the channels opened so far are released and the
        collection ends FAILED without fetching.
        """
        if self._started:
            raise RuntimeError("LiveCollection already started")
        self._started = True
        self._alive = True
        self._loop = asyncio.get_running_loop()
        self._state = CollectionState(status=CollectionStatus.LOADING)

        for spec in self._specs:
            try:
                handle = await self._feed.subscribe(spec.channel, spec.filter, self._on_event)
            except Exception as e:
                logger.warning("Subscribing to %s failed: %s", spec.channel, e)
                return await self._abort(str(e) or e.__class__.__name__)
            if not self._alive:
                await handle.close()
                return self._state
            self._handles.append(handle)

        return await self.refetch()

    async def _abort(self, error: str) -> CollectionState[T]:
        was_alive = self._alive
        self._alive = False
        handles, self._handles = self._handles, []
        for handle in handles:
            await handle.close()
        if not was_alive:
            return self._state
        self._state = replace(self._state, status=CollectionStatus.FAILED, error=error)
        self._notify()
        return self._state

    async def refetch(self) -> CollectionState[T]:
        """Request a fresh snapshot and wait until one at least that new is applied."""
        if not self._alive:
            return self._state
        target = self._request()
        while self._alive and self._state.version < target:
            task = self._task
            if task is None or task.done():
                break
            await asyncio.wait({task})
        return self._state

    async def settle(self) -> CollectionState[T]:
        """Wait until no fetch is running or queued."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._state

    async def stop(self) -> None:
        if not self._alive and not self._handles:
            return
        self._alive = False
        handles, self._handles = self._handles, []
        for handle in handles:
            await handle.close()

        task = self._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})
        logger.debug("Live collection stopped (%d channels released)", len(handles))

    async def __aenter__(self) -> "LiveCollection[T]":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    def _on_event(self, event: ChangeEvent) -> None:
        if not self._alive or self._loop is None:
            return
        logger.debug("Change on %s (%s), scheduling refetch", event.table, event.kind.value)
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._request()
        else:
            self._loop.call_soon_threadsafe(self._request)

    def _request(self) -> int:
        if not self._alive:
            return self._issued
        self._issued += 1
        if self._task is None or self._task.done():
            self._task = self._loop.create_task(self._drain())
        return self._issued

    async def _drain(self) -> None:
        while self._alive and self._fetched < self._issued:
            version = self._issued
            self._fetched = version
            try:
                items = await self._fetcher()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning("Collection fetch failed: %s", e)
                self._apply(version, error=str(e) or e.__class__.__name__)
            else:
                self._apply(version, items=tuple(items))

    def _apply(self, version: int, items: tuple[T, ...] | None = None, error: str | None = None) -> None:
        if not self._alive or version != self._issued:
            logger.debug("Discarding snapshot v%d (latest v%d, alive=%s)", version, self._issued, self._alive)
            return

        if error is not None:
            self._state = replace(self._state, status=CollectionStatus.FAILED, error=error, version=version)
        else:
            self._state = CollectionState(items=items or (), status=CollectionStatus.READY, version=version)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Collection listener failed")
