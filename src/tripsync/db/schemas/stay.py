"""SQLAlchemy ORM models for accommodations and trip_documents."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile

DOCUMENT_CATEGORIES = ("accommodation", "reservation", "activity", "flight", "other")


class Accommodation(IdMixin, TimestampMixin, Base):
    """Where the group sleeps. At most one row per trip."""

    __tablename__ = "accommodations"

    trip_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    name: Mapped[str | None] = mapped_column(String(200))
    address: Mapped[str | None] = mapped_column(String(500))
    check_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    door_code: Mapped[str | None] = mapped_column(String(50))
    wifi_name: Mapped[str | None] = mapped_column(String(100))
    wifi_password: Mapped[str | None] = mapped_column(String(100))
    house_rules: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)
    updated_by: Mapped[str | None] = mapped_column(String(64))


class TripDocument(IdMixin, TimestampMixin, Base):
    __tablename__ = "trip_documents"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="other")
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)

    creator: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(TripDocument.created_by) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint(
            "category IN ('accommodation', 'reservation', 'activity', 'flight', 'other')",
            name="chk_trip_documents_category",
        ),
        Index("idx_trip_documents_trip_id", "trip_id"),
    )
