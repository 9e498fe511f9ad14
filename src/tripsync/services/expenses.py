"""Shared expenses, their splits, and settle-up balances."""

import logging
from typing import Any

from sqlalchemy import delete, select

from tripsync.context import RequestContext
from tripsync.db.schemas.expense import ExpenseSplit, SharedExpense
from tripsync.db.schemas.trip import TripMember
from tripsync.errors import NotFoundError, ValidationError
from tripsync.models.common import user_summary
from tripsync.models.expense import CreateExpenseRequest, ExpenseRecord
from tripsync.realtime.feed import ChangeEvent, ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member
from tripsync.utils.balances import calculate_balances, calculate_settlements
from tripsync.utils.money import calculate_equal_split

logger = logging.getLogger(__name__)


def _expense_query(trip_id: str):
    return (
        select(SharedExpense)
        .where(SharedExpense.trip_id == trip_id)
        .order_by(SharedExpense.date.desc(), SharedExpense.created_at.desc())
    )


def list_expenses(ctx: RequestContext, trip_id: str) -> list[ExpenseRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to view this trip")
        return [ExpenseRecord.from_row(row) for row in session.scalars(_expense_query(trip_id)).all()]


def create_expense(ctx: RequestContext, trip_id: str, data: CreateExpenseRequest) -> ExpenseRecord:
    """
    Record an expense and its splits in one transaction.

    ``equal`` divides the amount across all current members; ``custom`` takes
    the given splits as-is. Payer and split participants must be members.
    """
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to add expenses to this trip")
        member_ids = session.scalars(select(TripMember.user_id).where(TripMember.trip_id == trip_id)).all()

        paid_by = data.paid_by or user.user_id
        if paid_by not in member_ids:
            raise ValidationError("paid_by must be a member of this trip")

        if data.split_type == "equal":
            share = calculate_equal_split(data.amount, len(member_ids))
            splits = [ExpenseSplit(user_id=uid, amount=share) for uid in member_ids]
        else:
            outsiders = [s.user_id for s in data.custom_splits if s.user_id not in member_ids]
            if outsiders:
                raise ValidationError(f"Split participants must be trip members: {', '.join(outsiders)}")
            splits = [ExpenseSplit(user_id=s.user_id, amount=s.amount) for s in data.custom_splits]

        expense = SharedExpense(
            trip_id=trip_id,
            paid_by=paid_by,
            amount=data.amount,
            description=data.description,
            category=data.category,
            date=data.date,
            splits=splits,
        )
        session.add(expense)
        session.flush()
        record = ExpenseRecord.from_row(expense)
        events = [change("shared_expenses", ChangeKind.INSERT, expense)]
        events += [change("expense_splits", ChangeKind.INSERT, s, trip_id=trip_id) for s in expense.splits]

    logger.info("Expense %s (%.2f, %d splits) added to trip %s", record.id, record.amount, len(splits), trip_id)
    ctx.publish(*events)
    return record


def delete_expense(ctx: RequestContext, trip_id: str, expense_id: str) -> None:
    """Delete an expense; its splits go with it via ON DELETE CASCADE."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized")
        result = session.execute(
            delete(SharedExpense).where(SharedExpense.id == expense_id, SharedExpense.trip_id == trip_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("Expense not found")

    ctx.publish(
        ChangeEvent("shared_expenses", ChangeKind.DELETE, {"id": expense_id, "trip_id": trip_id}),
        ChangeEvent("expense_splits", ChangeKind.DELETE, {"expense_id": expense_id, "trip_id": trip_id}),
    )


def get_balances(ctx: RequestContext, trip_id: str) -> dict[str, Any]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to view this trip")
        members = session.scalars(
            select(TripMember).where(TripMember.trip_id == trip_id).order_by(TripMember.joined_at)
        ).all()
        expenses = session.scalars(_expense_query(trip_id)).all()
        balances = calculate_balances(expenses, [(m.user_id, user_summary(m.profile).name) for m in members])

    return {"balances": balances, "settlements": calculate_settlements(balances)}
