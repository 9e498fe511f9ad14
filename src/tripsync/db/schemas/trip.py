"""SQLAlchemy ORM models for trips, trip_members and pending_invites."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin, utcnow
from tripsync.db.schemas.profile import Profile


class Trip(IdMixin, TimestampMixin, Base):
    __tablename__ = "trips"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    budget_total: Mapped[float | None] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="planning")
    trip_type: Mapped[str] = mapped_column(String(30), nullable=False, default="general")
    proposal_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    invite_code: Mapped[str] = mapped_column(String(12), nullable=False, unique=True)

    members: Mapped[list["TripMember"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", passive_deletes=True, order_by="TripMember.joined_at"
    )

    __table_args__ = (
        CheckConstraint("status IN ('planning', 'confirmed', 'completed', 'cancelled')", name="chk_trips_status"),
        CheckConstraint(
            "trip_type IN ('general', 'golf', 'ski', 'bachelor_party', 'bachelorette_party')",
            name="chk_trips_trip_type",
        ),
        Index("idx_trips_created_by", "created_by"),
    )


class TripMember(IdMixin, Base):
    __tablename__ = "trip_members"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    rsvp_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    budget_cap: Mapped[float | None] = mapped_column(Float)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    trip: Mapped[Trip] = relationship(back_populates="members")
    profile: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(TripMember.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_members_trip_user"),
        CheckConstraint("role IN ('organizer', 'member')", name="chk_trip_members_role"),
        CheckConstraint(
            "rsvp_status IN ('pending', 'accepted', 'declined', 'maybe')", name="chk_trip_members_rsvp_status"
        ),
        Index("idx_trip_members_user_id", "user_id"),
    )


class PendingInvite(IdMixin, Base):
    __tablename__ = "pending_invites"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100))
    invited_by: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (UniqueConstraint("trip_id", "email", name="uq_pending_invites_trip_email"),)
