"""SQLAlchemy ORM models for golf_tee_times and golf_scores."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class GolfTeeTime(IdMixin, TimestampMixin, Base):
    __tablename__ = "golf_tee_times"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    course_name: Mapped[str] = mapped_column(String(200), nullable=False)
    course_location: Mapped[str | None] = mapped_column(String(200))
    tee_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    num_players: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)

    scores: Mapped[list["GolfScore"]] = relationship(
        back_populates="tee_time", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (Index("idx_golf_tee_times_trip_id", "trip_id"),)


class GolfScore(IdMixin, TimestampMixin, Base):
    __tablename__ = "golf_scores"

    tee_time_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("golf_tee_times.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    handicap: Mapped[int | None] = mapped_column(Integer)

    tee_time: Mapped[GolfTeeTime] = relationship(back_populates="scores", lazy="selectin")
    player: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(GolfScore.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (UniqueConstraint("tee_time_id", "user_id", name="uq_golf_scores_tee_time_user"),)
