"""Per-request context passed explicitly into every service call."""

from dataclasses import dataclass
from typing import Protocol

from tripsync.auth.interface import AuthUser
from tripsync.db.store import Store
from tripsync.realtime.feed import ChangeEvent


class Publisher(Protocol):
    def publish(self, event: ChangeEvent) -> int: ...


@dataclass(frozen=True)
class RequestContext:
    store: Store
    changes: Publisher
    identity: AuthUser | None = None

    @property
    def user_id(self) -> str | None:
        return self.identity.user_id if self.identity else None

    def publish(self, *events: ChangeEvent) -> None:
        for event in events:
            self.changes.publish(event)
