"""SQLAlchemy ORM model for the supply_items table."""

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile

SUPPLY_CATEGORIES = (
    "food_drinks",
    "gear_equipment",
    "kitchen_cooking",
    "entertainment",
    "toiletries",
    "other",
)


class SupplyItem(IdMixin, TimestampMixin, Base):
    __tablename__ = "supply_items"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="needed")
    cost: Mapped[float | None] = mapped_column(Float)
    claimed_by: Mapped[str | None] = mapped_column(String(64))
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)

    claimer: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(SupplyItem.claimed_by) == Profile.id", viewonly=True, lazy="selectin"
    )
    creator: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(SupplyItem.created_by) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("status IN ('needed', 'claimed', 'packed')", name="chk_supply_items_status"),
        Index("idx_supply_items_trip_id", "trip_id"),
    )
