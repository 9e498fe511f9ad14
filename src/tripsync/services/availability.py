"""Date ranges members can make it, used to pick trip dates."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.availability import UserAvailability
from tripsync.errors import NotFoundError
from tripsync.models.availability import AvailabilityRecord, CreateAvailabilityRequest
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_owner


def list_availability(ctx: RequestContext, trip_id: str) -> list[AvailabilityRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(UserAvailability)
            .where(UserAvailability.trip_id == trip_id)
            .order_by(UserAvailability.start_date, UserAvailability.created_at)
        ).all()
        return [AvailabilityRecord.from_row(row) for row in rows]


def add_availability(ctx: RequestContext, trip_id: str, data: CreateAvailabilityRequest) -> AvailabilityRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        window = UserAvailability(trip_id=trip_id, user_id=user.user_id, **data.model_dump())
        session.add(window)
        session.flush()
        record = AvailabilityRecord.from_row(window)
        event = change("user_availability", ChangeKind.INSERT, window)

    ctx.publish(event)
    return record


def delete_availability(ctx: RequestContext, trip_id: str, availability_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        window = session.scalar(
            select(UserAvailability).where(UserAvailability.id == availability_id, UserAvailability.trip_id == trip_id)
        )
        if window is None:
            raise NotFoundError("Availability not found")
        require_owner(window.user_id, user, "Can only delete your own availability")
        event = change("user_availability", ChangeKind.DELETE, window)
        session.delete(window)

    ctx.publish(event)
