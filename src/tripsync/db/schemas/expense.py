"""SQLAlchemy ORM models for shared_expenses and expense_splits."""

import datetime as dt

from sqlalchemy import CheckConstraint, Date, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripsync.db.schemas.base import Base, IdMixin, TimestampMixin
from tripsync.db.schemas.profile import Profile


class SharedExpense(IdMixin, TimestampMixin, Base):
    __tablename__ = "shared_expenses"

    trip_id: Mapped[str] = mapped_column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    paid_by: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str | None] = mapped_column(String(50))
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    payer: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(SharedExpense.paid_by) == Profile.id", viewonly=True, lazy="selectin"
    )
    splits: Mapped[list["ExpenseSplit"]] = relationship(
        back_populates="expense", cascade="all, delete-orphan", passive_deletes=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_shared_expenses_amount"),
        Index("idx_shared_expenses_trip_id", "trip_id"),
    )


class ExpenseSplit(IdMixin, Base):
    __tablename__ = "expense_splits"

    expense_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("shared_expenses.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    expense: Mapped[SharedExpense] = relationship(back_populates="splits")
    profile: Mapped[Profile | None] = relationship(
        Profile, primaryjoin="foreign(ExpenseSplit.user_id) == Profile.id", viewonly=True, lazy="selectin"
    )

    __table_args__ = (Index("idx_expense_splits_expense_id", "expense_id"),)
