"""
Authorization guard for trip-scoped operations.

Checks run in a fixed order: identity first (before the store is touched),
then trip membership or role, then resource ownership.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from tripsync.auth.interface import AuthUser
from tripsync.context import RequestContext
from tripsync.db.schemas.trip import Trip, TripMember
from tripsync.errors import ForbiddenError, NotFoundError, UnauthorizedError


def require_identity(ctx: RequestContext) -> AuthUser:
    if ctx.identity is None:
        raise UnauthorizedError()
    return ctx.identity


def get_membership(session: Session, trip_id: str, user_id: str) -> TripMember | None:
    return session.scalar(select(TripMember).where(TripMember.trip_id == trip_id, TripMember.user_id == user_id))


def require_member(
    session: Session, trip_id: str, user: AuthUser, message: str = "Not a member of this trip"
) -> TripMember:
    membership = get_membership(session, trip_id, user.user_id)
    if membership is not None:
        return membership
    if session.get(Trip, trip_id) is None:
        raise NotFoundError("Trip not found")
    raise ForbiddenError(message)


def require_organizer(
    session: Session, trip_id: str, user: AuthUser, message: str = "Only organizers can do that"
) -> TripMember:
    membership = get_membership(session, trip_id, user.user_id)
    if membership is None and session.get(Trip, trip_id) is None:
        raise NotFoundError("Trip not found")
    if membership is None or membership.role != "organizer":
        raise ForbiddenError(message)
    return membership


def require_owner(owner_id: str | None, user: AuthUser, message: str = "You can only change your own entries") -> None:
    if owner_id != user.user_id:
        raise ForbiddenError(message)
