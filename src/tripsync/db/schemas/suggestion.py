"""SQLAlchemy ORM model for the activity_suggestions table."""

import datetime as dt

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class ActivitySuggestion(IdMixin, TimestampMixin, Base):
    __tablename__ = "activity_suggestions"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    suggested_by: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[dt.date | None] = mapped_column(Date)
    time: Mapped[str | None] = mapped_column(String(8))
    location: Mapped[str | None] = mapped_column(String(200))
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")

    author: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(ActivitySuggestion.suggested_by) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="chk_activity_suggestions_status"),
        Index("idx_activity_suggestions_trip_id", "trip_id"),
    )
