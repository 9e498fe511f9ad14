"""Activity suggestions: member proposals that organizers approve into the itinerary."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from tripsync.context import RequestContext
from tripsync.db.schemas.itinerary import ItineraryItem
from tripsync.db.schemas.suggestion import ActivitySuggestion
from tripsync.errors import NotFoundError, ValidationError
from tripsync.models.suggestion import (
    CreateSuggestionRequest,
    EditSuggestionRequest,
    SuggestionRecord,
    UpdateSuggestionStatusRequest,
)
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_organizer, require_owner

logger = logging.getLogger(__name__)


def _get_suggestion(session: Session, trip_id: str, suggestion_id: str) -> ActivitySuggestion:
    suggestion = session.scalar(
        select(ActivitySuggestion).where(ActivitySuggestion.id == suggestion_id, ActivitySuggestion.trip_id == trip_id)
    )
    if suggestion is None:
        raise NotFoundError("Suggestion not found")
    return suggestion


def list_suggestions(ctx: RequestContext, trip_id: str) -> list[SuggestionRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not a trip member")
        rows = session.scalars(
            select(ActivitySuggestion)
            .where(ActivitySuggestion.trip_id == trip_id)
            .order_by(ActivitySuggestion.created_at.desc())
        ).all()
        return [SuggestionRecord.from_row(row) for row in rows]


def create_suggestion(ctx: RequestContext, trip_id: str, data: CreateSuggestionRequest) -> SuggestionRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not a trip member")
        suggestion = ActivitySuggestion(trip_id=trip_id, suggested_by=user.user_id, **data.model_dump())
        session.add(suggestion)
        session.flush()
        record = SuggestionRecord.from_row(suggestion)
        event = change("activity_suggestions", ChangeKind.INSERT, suggestion)

    ctx.publish(event)
    return record


def review_suggestion(
    ctx: RequestContext, trip_id: str, suggestion_id: str, data: UpdateSuggestionStatusRequest
) -> SuggestionRecord:
    """Approve or reject. Approving copies the suggestion into the itinerary once."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can approve/reject")
        suggestion = _get_suggestion(session, trip_id, suggestion_id)
        events = []

        if data.status == "approved" and suggestion.status != "approved":
            if suggestion.date is None:
                raise ValidationError("A suggestion needs a date before it can be approved")
            item = ItineraryItem(
                trip_id=trip_id,
                title=suggestion.title,
                description=suggestion.description,
                date=suggestion.date,
                time=suggestion.time,
                location=suggestion.location,
                created_by=suggestion.suggested_by,
            )
            session.add(item)
            session.flush()
            events.append(change("itinerary_items", ChangeKind.INSERT, item))
            logger.info("Suggestion %s approved into itinerary item %s", suggestion_id, item.id)

        suggestion.status = data.status
        session.flush()
        record = SuggestionRecord.from_row(suggestion)
        events.insert(0, change("activity_suggestions", ChangeKind.UPDATE, suggestion))

    ctx.publish(*events)
    return record


def edit_suggestion(
    ctx: RequestContext, trip_id: str, suggestion_id: str, data: EditSuggestionRequest
) -> SuggestionRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not a trip member")
        suggestion = _get_suggestion(session, trip_id, suggestion_id)
        require_owner(suggestion.suggested_by, user, "You can only edit your own suggestions")
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(suggestion, key, value)
        session.flush()
        record = SuggestionRecord.from_row(suggestion)
        event = change("activity_suggestions", ChangeKind.UPDATE, suggestion)

    ctx.publish(event)
    return record


def delete_suggestion(ctx: RequestContext, trip_id: str, suggestion_id: str) -> None:
    """Organizers may delete any suggestion; members only their own."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        membership = require_member(session, trip_id, user, "Not a trip member")
        suggestion = _get_suggestion(session, trip_id, suggestion_id)
        if membership.role != "organizer":
            require_owner(suggestion.suggested_by, user, "You can only delete your own suggestions")
        event = change("activity_suggestions", ChangeKind.DELETE, suggestion)
        session.delete(suggestion)

    ctx.publish(event)
