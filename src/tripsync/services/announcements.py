"""Organizer announcements, pinned ones first."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from tripsync.auth.interface import AuthUser
from tripsync.context import RequestContext
from tripsync.db.schemas.announcement import TripAnnouncement
from tripsync.errors import NotFoundError
from tripsync.models.announcement import AnnouncementRecord, CreateAnnouncementRequest, PinAnnouncementRequest
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_organizer, require_owner


def list_announcements(ctx: RequestContext, trip_id: str) -> list[AnnouncementRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(TripAnnouncement)
            .where(TripAnnouncement.trip_id == trip_id)
            .order_by(TripAnnouncement.is_pinned.desc(), TripAnnouncement.created_at.desc())
        ).all()
        return [AnnouncementRecord.from_row(row) for row in rows]


def create_announcement(ctx: RequestContext, trip_id: str, data: CreateAnnouncementRequest) -> AnnouncementRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can post announcements")
        announcement = TripAnnouncement(trip_id=trip_id, created_by=user.user_id, **data.model_dump())
        session.add(announcement)
        session.flush()
        record = AnnouncementRecord.from_row(announcement)
        event = change("trip_announcements", ChangeKind.INSERT, announcement)

    ctx.publish(event)
    return record


def _own_announcement(session: Session, trip_id: str, announcement_id: str, user: AuthUser) -> TripAnnouncement:
    require_member(session, trip_id, user, "Forbidden")
    announcement = session.scalar(
        select(TripAnnouncement).where(TripAnnouncement.id == announcement_id, TripAnnouncement.trip_id == trip_id)
    )
    if announcement is None:
        raise NotFoundError("Announcement not found")
    require_owner(announcement.created_by, user, "Can only change your own announcements")
    return announcement


def set_pinned(
    ctx: RequestContext, trip_id: str, announcement_id: str, data: PinAnnouncementRequest
) -> AnnouncementRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        announcement = _own_announcement(session, trip_id, announcement_id, user)
        announcement.is_pinned = data.is_pinned
        session.flush()
        record = AnnouncementRecord.from_row(announcement)
        event = change("trip_announcements", ChangeKind.UPDATE, announcement)

    ctx.publish(event)
    return record


def delete_announcement(ctx: RequestContext, trip_id: str, announcement_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        announcement = _own_announcement(session, trip_id, announcement_id, user)
        event = change("trip_announcements", ChangeKind.DELETE, announcement)
        session.delete(announcement)

    ctx.publish(event)
