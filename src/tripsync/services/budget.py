"""Budget categories and their per-member splits."""

from sqlalchemy import delete, select

from tripsync.context import RequestContext
from tripsync.db.schemas.budget import BudgetCategory, BudgetSplit
from tripsync.errors import NotFoundError
from tripsync.models.budget import BudgetCategoryRecord, CreateBudgetCategoryRequest, UpdateBudgetCategoryRequest
from tripsync.realtime.feed import ChangeEvent, ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_organizer


def list_categories(ctx: RequestContext, trip_id: str) -> list[BudgetCategoryRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to view this trip")
        rows = session.scalars(
            select(BudgetCategory)
            .where(BudgetCategory.trip_id == trip_id)
            .order_by(BudgetCategory.sort_order, BudgetCategory.created_at)
        ).all()
        return [BudgetCategoryRecord.from_row(row) for row in rows]


def create_category(ctx: RequestContext, trip_id: str, data: CreateBudgetCategoryRequest) -> BudgetCategoryRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can add budget categories")
        category = BudgetCategory(
            trip_id=trip_id,
            name=data.name,
            estimated_cost=data.estimated_cost,
            split_type=data.split_type,
            description=data.description,
            sort_order=data.sort_order,
        )
        if data.split_type == "custom":
            category.splits = [BudgetSplit(user_id=s.user_id, amount=s.amount) for s in data.custom_splits]
        session.add(category)
        session.flush()
        record = BudgetCategoryRecord.from_row(category)
        events = [change("budget_categories", ChangeKind.INSERT, category)]
        events += [change("budget_splits", ChangeKind.INSERT, s, trip_id=trip_id) for s in category.splits]

    ctx.publish(*events)
    return record


def update_category(
    ctx: RequestContext, trip_id: str, category_id: str, data: UpdateBudgetCategoryRequest
) -> BudgetCategoryRecord:
    """
    Update a category. Moving to ``custom`` with ``custom_splits`` replaces the
    splits; moving to any other split type drops them.
    """
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can update budget categories")
        category = session.scalar(
            select(BudgetCategory).where(BudgetCategory.id == category_id, BudgetCategory.trip_id == trip_id)
        )
        if category is None:
            raise NotFoundError("Budget category not found")

        fields = data.model_dump(exclude_unset=True, exclude={"custom_splits"})
        for key, value in fields.items():
            setattr(category, key, value)

        resplit = False
        if data.split_type == "custom" and data.custom_splits is not None:
            category.splits = [BudgetSplit(user_id=s.user_id, amount=s.amount) for s in data.custom_splits]
            resplit = True
        elif data.split_type is not None and data.split_type != "custom":
            resplit = bool(category.splits)
            category.splits = []

        session.flush()
        record = BudgetCategoryRecord.from_row(category)
        events = [change("budget_categories", ChangeKind.UPDATE, category)]
        if resplit:
            events.append(ChangeEvent("budget_splits", ChangeKind.UPDATE, {"category_id": category_id, "trip_id": trip_id}))

    ctx.publish(*events)
    return record


def delete_category(ctx: RequestContext, trip_id: str, category_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_organizer(session, trip_id, user, "Only organizers can delete budget categories")
        result = session.execute(
            delete(BudgetCategory).where(BudgetCategory.id == category_id, BudgetCategory.trip_id == trip_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("Budget category not found")

    ctx.publish(
        ChangeEvent("budget_categories", ChangeKind.DELETE, {"id": category_id, "trip_id": trip_id}),
        ChangeEvent("budget_splits", ChangeKind.DELETE, {"category_id": category_id, "trip_id": trip_id}),
    )
