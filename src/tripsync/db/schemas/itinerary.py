"""SQLAlchemy ORM models for itinerary_items and comments."""

import datetime as dt

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class ItineraryItem(IdMixin, TimestampMixin, Base):
    __tablename__ = "itinerary_items"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str | None] = mapped_column(String(8))
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(200))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_by: Mapped[str | None] = mapped_column(String(64))

    author: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(ItineraryItem.created_by) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (Index("idx_itinerary_items_trip_date", "trip_id", "date"),)


class Comment(IdMixin, TimestampMixin, Base):
    __tablename__ = "comments"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    itinerary_item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("itinerary_items.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    text: Mapped[str] = mapped_column(String(500), nullable=False)

    author: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(Comment.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        Index("idx_comments_trip_id", "trip_id"),
        Index("idx_comments_itinerary_item_id", "itinerary_item_id"),
    )
