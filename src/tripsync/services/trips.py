"""Trip lifecycle: listing, creation, updates, deletion, joining and proposals."""

import logging
from typing import Any

from sqlalchemy import delete, select

from tripsync.context import RequestContext
from tripsync.db.schemas.trip import Trip, TripMember
from tripsync.errors import NotFoundError, ValidationError
from tripsync.models.trip import (
    CreateTripRequest,
    JoinTripRequest,
    ProposalToggleRequest,
    TripRecord,
    UpdateTripRequest,
)
from tripsync.realtime.feed import ChangeEvent, ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import get_membership, require_identity, require_member, require_organizer, require_owner
from tripsync.utils.invite_code import generate_invite_code

logger = logging.getLogger(__name__)


def list_trips(ctx: RequestContext) -> list[TripRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        rows = session.scalars(
            select(Trip)
            .join(TripMember, TripMember.trip_id == Trip.id)
            .where(TripMember.user_id == user.user_id)
            .order_by(Trip.created_at.desc())
        ).all()
        return [TripRecord.from_row(row) for row in rows]


def create_trip(ctx: RequestContext, data: CreateTripRequest) -> TripRecord:
    """Create a trip with the caller as its accepted organizer."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        trip = Trip(
            title=data.title,
            destination=data.destination,
            start_date=data.start_date,
            end_date=data.end_date,
            description=data.description,
            budget_total=data.budget_total,
            trip_type=data.trip_type,
            status="planning",
            created_by=user.user_id,
            invite_code=generate_invite_code(),
            members=[TripMember(user_id=user.user_id, role="organizer", rsvp_status="accepted")],
        )
        session.add(trip)
        session.flush()
        record = TripRecord.from_row(trip)
        events = [change("trips", ChangeKind.INSERT, trip), change("trip_members", ChangeKind.INSERT, trip.members[0])]

    logger.info("Trip %s created by %s", record.id, user.user_id)
    ctx.publish(*events)
    return record


def get_trip(ctx: RequestContext, trip_id: str) -> TripRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user)
        trip = session.get(Trip, trip_id)
        return TripRecord.from_row(trip)


def update_trip(ctx: RequestContext, trip_id: str, data: UpdateTripRequest) -> TripRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can update the trip")
        trip = session.get(Trip, trip_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(trip, key, value)
        if trip.end_date < trip.start_date:
            raise ValidationError("End date must be after start date")
        session.flush()
        record = TripRecord.from_row(trip)
        event = change("trips", ChangeKind.UPDATE, trip)

    ctx.publish(event)
    return record


def delete_trip(ctx: RequestContext, trip_id: str) -> None:
    """Delete a trip; every trip-scoped row goes with it via ON DELETE CASCADE."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        trip = session.get(Trip, trip_id)
        if trip is None:
            raise NotFoundError("Trip not found")
        require_owner(trip.created_by, user, "Only the trip creator can delete the trip")
        session.execute(delete(Trip).where(Trip.id == trip_id))

    logger.info("Trip %s deleted by %s", trip_id, user.user_id)
    ctx.publish(ChangeEvent("trips", ChangeKind.DELETE, {"id": trip_id}))


def join_trip(ctx: RequestContext, trip_id: str, data: JoinTripRequest) -> bool:
    """Join a trip, or update the caller's RSVP. Returns True when a membership was created."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        if session.get(Trip, trip_id) is None:
            raise NotFoundError("Trip not found")
        membership = get_membership(session, trip_id, user.user_id)
        created = membership is None
        if created:
            membership = TripMember(trip_id=trip_id, user_id=user.user_id, role="member", rsvp_status=data.rsvp_status)
            session.add(membership)
        else:
            membership.rsvp_status = data.rsvp_status
        session.flush()
        event = change("trip_members", ChangeKind.INSERT if created else ChangeKind.UPDATE, membership)

    ctx.publish(event)
    return created


def set_proposal_enabled(ctx: RequestContext, trip_id: str, data: ProposalToggleRequest) -> dict[str, Any]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can toggle proposals")
        trip = session.get(Trip, trip_id)
        trip.proposal_enabled = data.proposal_enabled
        session.flush()
        event = change("trips", ChangeKind.UPDATE, trip)

    ctx.publish(event)
    return {"id": trip_id, "proposal_enabled": data.proposal_enabled}
