"""SQLAlchemy ORM model for the user_availability table."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class UserAvailability(IdMixin, TimestampMixin, Base):
    __tablename__ = "user_availability"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    user: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(UserAvailability.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="chk_user_availability_dates"),
        Index("idx_user_availability_trip_id", "trip_id"),
    )
