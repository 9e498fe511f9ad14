"""Trip membership: roster, invitations by email, roles and budget caps."""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tripsync.context import RequestContext
from tripsync.db.schemas.profile import Profile
from tripsync.db.schemas.trip import PendingInvite, TripMember
from tripsync.errors import ConflictError, NotFoundError, ValidationError
from tripsync.models.member import AddMemberRequest, BudgetCapRequest, PendingInviteRecord, UpdateMemberRequest
from tripsync.models.trip import MemberRecord
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_organizer

logger = logging.getLogger(__name__)


def _organizer_count(session: Session, trip_id: str) -> int:
    return session.scalar(
        select(func.count()).select_from(TripMember).where(TripMember.trip_id == trip_id, TripMember.role == "organizer")
    )


def _get_member(session: Session, trip_id: str, member_id: str) -> TripMember:
    member = session.scalar(select(TripMember).where(TripMember.id == member_id, TripMember.trip_id == trip_id))
    if member is None:
        raise NotFoundError("Member not found")
    return member


def list_members(ctx: RequestContext, trip_id: str) -> tuple[list[MemberRecord], list[PendingInviteRecord]]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not a trip member")
        members = session.scalars(
            select(TripMember).where(TripMember.trip_id == trip_id).order_by(TripMember.joined_at)
        ).all()
        invites = session.scalars(
            select(PendingInvite).where(PendingInvite.trip_id == trip_id).order_by(PendingInvite.created_at)
        ).all()
        return [MemberRecord.from_row(m) for m in members], [PendingInviteRecord.from_row(i) for i in invites]


def add_member(ctx: RequestContext, trip_id: str, data: AddMemberRequest) -> tuple[str, Any]:
    """
    Add a member by email.

    A known profile becomes a pending-RSVP member; an unknown email becomes a
    pending invite. Returns ``("member", MemberRecord)`` or
    ``("pending_invite", PendingInviteRecord)``.
    """
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can add members")
        profile = session.scalar(select(Profile).where(Profile.email == data.email))

        if profile is not None:
            existing = session.scalar(
                select(TripMember).where(TripMember.trip_id == trip_id, TripMember.user_id == profile.id)
            )
            if existing is not None:
                raise ConflictError("User is already a member of this trip")
            member = TripMember(trip_id=trip_id, user_id=profile.id, role="member", rsvp_status="pending")
            session.add(member)
            session.flush()
            result: tuple[str, Any] = ("member", MemberRecord.from_row(member))
            event = change("trip_members", ChangeKind.INSERT, member)
        else:
            existing_invite = session.scalar(
                select(PendingInvite).where(PendingInvite.trip_id == trip_id, PendingInvite.email == data.email)
            )
            if existing_invite is not None:
                raise ConflictError("An invite is already pending for this email")
            invite = PendingInvite(trip_id=trip_id, email=data.email, name=data.name, invited_by=user.user_id)
            session.add(invite)
            session.flush()
            result = ("pending_invite", PendingInviteRecord.from_row(invite))
            event = change("pending_invites", ChangeKind.INSERT, invite)

    logger.info("Added %s to trip %s as %s", data.email, trip_id, result[0])
    ctx.publish(event)
    return result


def update_member(ctx: RequestContext, trip_id: str, member_id: str, data: UpdateMemberRequest) -> MemberRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can update members")
        member = _get_member(session, trip_id, member_id)
        if data.role == "member" and member.role == "organizer" and _organizer_count(session, trip_id) <= 1:
            raise ValidationError("Cannot demote the only organizer")

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(member, key, value)
        session.flush()
        record = MemberRecord.from_row(member)
        event = change("trip_members", ChangeKind.UPDATE, member)

    ctx.publish(event)
    return record


def remove_member(ctx: RequestContext, trip_id: str, member_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can remove members")
        member = _get_member(session, trip_id, member_id)
        if member.user_id == user.user_id and _organizer_count(session, trip_id) <= 1:
            raise ValidationError("Cannot remove yourself as the only organizer")
        event = change("trip_members", ChangeKind.DELETE, member)
        session.delete(member)

    ctx.publish(event)


def set_budget_cap(ctx: RequestContext, trip_id: str, data: BudgetCapRequest) -> dict[str, Any]:
    """Set the caller's own budget cap; ``None`` clears it."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        membership = require_member(session, trip_id, user)
        membership.budget_cap = data.budget_cap
        session.flush()
        event = change("trip_members", ChangeKind.UPDATE, membership)
        result = {"id": membership.id, "budget_cap": membership.budget_cap}

    ctx.publish(event)
    return result
