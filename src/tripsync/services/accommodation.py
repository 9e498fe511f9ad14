"""The trip's accommodation: one record per trip, replaced wholesale by organizers."""

import logging

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.stay import Accommodation
from tripsync.models.stay import AccommodationRecord, AccommodationRequest
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_organizer

logger = logging.getLogger(__name__)


def get_accommodation(ctx: RequestContext, trip_id: str) -> AccommodationRecord | None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        row = session.scalar(select(Accommodation).where(Accommodation.trip_id == trip_id))
        return AccommodationRecord.from_row(row) if row is not None else None


def save_accommodation(ctx: RequestContext, trip_id: str, data: AccommodationRequest) -> AccommodationRecord:
    """Create or replace the trip's accommodation."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can manage accommodation")
        row = session.scalar(select(Accommodation).where(Accommodation.trip_id == trip_id))
        kind = ChangeKind.UPDATE
        if row is None:
            row = Accommodation(trip_id=trip_id)
            session.add(row)
            kind = ChangeKind.INSERT

        for key, value in data.model_dump().items():
            setattr(row, key, value)
        row.updated_by = user.user_id
        session.flush()
        record = AccommodationRecord.from_row(row)
        event = change("accommodations", kind, row)

    logger.info("Accommodation for trip %s saved by %s", trip_id, user.user_id)
    ctx.publish(event)
    return record
