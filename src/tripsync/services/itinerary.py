"""Itinerary items."""

from sqlalchemy import delete, select

from tripsync.context import RequestContext
from tripsync.db.schemas.itinerary import ItineraryItem
from tripsync.errors import NotFoundError
from tripsync.models.itinerary import CreateItineraryItemRequest, ItineraryItemRecord, UpdateItineraryItemRequest
from tripsync.realtime.feed import ChangeEvent, ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member


def list_items(ctx: RequestContext, trip_id: str) -> list[ItineraryItemRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to view this trip")
        rows = session.scalars(
            select(ItineraryItem)
            .where(ItineraryItem.trip_id == trip_id)
            .order_by(ItineraryItem.date, ItineraryItem.time, ItineraryItem.sort_order)
        ).all()
        return [ItineraryItemRecord.from_row(row) for row in rows]


def create_item(ctx: RequestContext, trip_id: str, data: CreateItineraryItemRequest) -> ItineraryItemRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized")
        item = ItineraryItem(trip_id=trip_id, created_by=user.user_id, **data.model_dump())
        session.add(item)
        session.flush()
        record = ItineraryItemRecord.from_row(item)
        event = change("itinerary_items", ChangeKind.INSERT, item)

    ctx.publish(event)
    return record


def update_item(
    ctx: RequestContext, trip_id: str, item_id: str, data: UpdateItineraryItemRequest
) -> ItineraryItemRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized")
        item = session.scalar(select(ItineraryItem).where(ItineraryItem.id == item_id, ItineraryItem.trip_id == trip_id))
        if item is None:
            raise NotFoundError("Itinerary item not found")
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(item, key, value)
        session.flush()
        record = ItineraryItemRecord.from_row(item)
        event = change("itinerary_items", ChangeKind.UPDATE, item)

    ctx.publish(event)
    return record


def delete_item(ctx: RequestContext, trip_id: str, item_id: str) -> None:
    """Delete an item; its comments go with it via ON DELETE CASCADE."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized")
        result = session.execute(
            delete(ItineraryItem).where(ItineraryItem.id == item_id, ItineraryItem.trip_id == trip_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("Itinerary item not found")

    ctx.publish(
        ChangeEvent("itinerary_items", ChangeKind.DELETE, {"id": item_id, "trip_id": trip_id}),
        ChangeEvent("comments", ChangeKind.DELETE, {"itinerary_item_id": item_id, "trip_id": trip_id}),
    )
