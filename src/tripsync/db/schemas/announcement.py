"""SQLAlchemy ORM model for the trip_announcements table."""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class TripAnnouncement(IdMixin, TimestampMixin, Base):
    __tablename__ = "trip_announcements"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)

    author: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(TripAnnouncement.created_by) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (Index("idx_trip_announcements_trip_id", "trip_id"),)
