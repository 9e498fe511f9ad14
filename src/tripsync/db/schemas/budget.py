"""SQLAlchemy ORM models for budget_categories and budget_splits."""

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class BudgetCategory(IdMixin, TimestampMixin, Base):
    __tablename__ = "budget_categories"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    estimated_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    split_type: Mapped[str] = mapped_column(String(10), nullable=False, default="equal")
    description: Mapped[str | None] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    splits: Mapped[list["BudgetSplit"]] = relationship(
        back_populates="category", cascade="all, delete-orphan", passive_deletes=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("split_type IN ('equal', 'custom', 'none')", name="chk_budget_categories_split_type"),
        Index("idx_budget_categories_trip_id", "trip_id"),
    )


class BudgetSplit(IdMixin, Base):
    __tablename__ = "budget_splits"

    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("budget_categories.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    category: Mapped[BudgetCategory] = relationship(back_populates="splits")
    profile: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(BudgetSplit.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (Index("idx_budget_splits_category_id", "category_id"),)
