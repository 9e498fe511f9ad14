"""
Per-entity bindings of the live-collection pattern.

Each adapter names the trip-scoped read path, the response key holding the
records, the record model, and the tables whose changes invalidate it.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from tripsync.api.client import TripApiClient
from tripsync.models import (
    AccommodationRecord,
    AnnouncementRecord,
    AvailabilityRecord,
    BudgetCategoryRecord,
    CommentRecord,
    DocumentRecord,
    ExpenseRecord,
    ItineraryItemRecord,
    MemberRecord,
    ScoreRecord,
    SuggestionRecord,
    SupplyRecord,
    TeeTimeRecord,
    TripRecord,
)
from tripsync.realtime.collection import Fetcher, LiveCollection, StateListener
from tripsync.realtime.feed import ChangeFeed, ChangeFilter, ChannelSpec

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class EntityAdapter(Generic[M]):
    name: str
    path: str
    key: str
    model: type[M]
    tables: tuple[str, ...]
    single: bool = False
    optional: bool = False

    def read_path(self, trip_id: str) -> str:
        return self.path.format(trip_id=trip_id)

    def channels(self, trip_id: str, **equals: str) -> list[ChannelSpec]:
        suffix = "_".join([trip_id, *(str(v) for _, v in sorted(equals.items()))])
        return [
            ChannelSpec(channel=f"{table}_{suffix}", filter=ChangeFilter.on(table, trip_id=trip_id, **equals))
            for table in self.tables
        ]

    def fetcher(self, client: TripApiClient, trip_id: str, **params: Any) -> Fetcher:
        path = self.read_path(trip_id)

        async def fetch() -> list[M]:
            if self.single and self.optional:
                record = await client.get_optional(path, self.key, self.model)
                return [record] if record is not None else []
            if self.single:
                return [await client.get_one(path, self.key, self.model)]
            return await client.get_list(path, self.key, self.model, params or None)

        return fetch


TRIP = EntityAdapter("trip", "/api/trips/{trip_id}", "trip", TripRecord, ("trip_members",), single=True)
MEMBERS = EntityAdapter("members", "/api/trips/{trip_id}/members", "members", MemberRecord, ("trip_members",))
BUDGET = EntityAdapter(
    "budget", "/api/trips/{trip_id}/budget", "categories", BudgetCategoryRecord, ("budget_categories", "budget_splits")
)
EXPENSES = EntityAdapter(
    "expenses", "/api/trips/{trip_id}/expenses", "expenses", ExpenseRecord, ("shared_expenses", "expense_splits")
)
ITINERARY = EntityAdapter("itinerary", "/api/trips/{trip_id}/itinerary", "items", ItineraryItemRecord, ("itinerary_items",))
COMMENTS = EntityAdapter("comments", "/api/trips/{trip_id}/comments", "comments", CommentRecord, ("comments",))
SUPPLIES = EntityAdapter("supplies", "/api/trips/{trip_id}/supplies", "supplies", SupplyRecord, ("supply_items",))
SUGGESTIONS = EntityAdapter(
    "suggestions", "/api/trips/{trip_id}/suggestions", "suggestions", SuggestionRecord, ("activity_suggestions",)
)
TEE_TIMES = EntityAdapter("tee_times", "/api/trips/{trip_id}/golf/tee-times", "tee_times", TeeTimeRecord, ("golf_tee_times",))
SCORES = EntityAdapter("scores", "/api/trips/{trip_id}/golf/scores", "scores", ScoreRecord, ("golf_scores",))
DOCUMENTS = EntityAdapter("documents", "/api/trips/{trip_id}/documents", "documents", DocumentRecord, ("trip_documents",))
ANNOUNCEMENTS = EntityAdapter(
    "announcements", "/api/trips/{trip_id}/announcements", "announcements", AnnouncementRecord, ("trip_announcements",)
)
AVAILABILITY = EntityAdapter(
    "availability", "/api/trips/{trip_id}/availability", "availability", AvailabilityRecord, ("user_availability",)
)
ACCOMMODATION = EntityAdapter(
    "accommodation",
    "/api/trips/{trip_id}/accommodation",
    "accommodation",
    AccommodationRecord,
    ("accommodations",),
    single=True,
    optional=True,
)

ADAPTERS: dict[str, EntityAdapter] = {
    a.name: a
    for a in (
        TRIP,
        MEMBERS,
        BUDGET,
        EXPENSES,
        ITINERARY,
        COMMENTS,
        SUPPLIES,
        SUGGESTIONS,
        TEE_TIMES,
        SCORES,
        DOCUMENTS,
        ANNOUNCEMENTS,
        AVAILABILITY,
        ACCOMMODATION,
    )
}


def live_collection(
    adapter: EntityAdapter[M],
    client: TripApiClient,
    feed: ChangeFeed,
    trip_id: str,
    on_change: StateListener | None = None,
    **equals: str,
) -> LiveCollection[M]:
    """
    Build an unstarted collection for ``adapter`` scoped to one trip.

    Extra keyword arguments narrow both the read (as query parameters) and
    the change filter, e.g. ``itinerary_item_id=...`` for one item's comments.
    """
    equals = {k: v for k, v in equals.items() if v is not None}
    return LiveCollection(
        fetcher=adapter.fetcher(client, trip_id, **equals),
        feed=feed,
        subscriptions=adapter.channels(trip_id, **equals),
        on_change=on_change,
    )
