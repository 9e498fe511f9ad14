"""Shared supply list: who brings what."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.supply import SupplyItem
from tripsync.errors import NotFoundError, ValidationError
from tripsync.models.supply import CreateSupplyRequest, SupplyRecord, UpdateSupplyRequest
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import get_membership, require_identity, require_member


def list_supplies(ctx: RequestContext, trip_id: str) -> list[SupplyRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(SupplyItem)
            .where(SupplyItem.trip_id == trip_id)
            .order_by(SupplyItem.category, SupplyItem.created_at)
        ).all()
        return [SupplyRecord.from_row(row) for row in rows]


def create_supply(ctx: RequestContext, trip_id: str, data: CreateSupplyRequest) -> SupplyRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        supply = SupplyItem(trip_id=trip_id, created_by=user.user_id, status="needed", **data.model_dump())
        session.add(supply)
        session.flush()
        record = SupplyRecord.from_row(supply)
        event = change("supply_items", ChangeKind.INSERT, supply)

    ctx.publish(event)
    return record


def update_supply(ctx: RequestContext, trip_id: str, supply_id: str, data: UpdateSupplyRequest) -> SupplyRecord:
    """Update fields, claim (``claimed_by``) or move an item through needed/claimed/packed."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        supply = session.scalar(select(SupplyItem).where(SupplyItem.id == supply_id, SupplyItem.trip_id == trip_id))
        if supply is None:
            raise NotFoundError("Supply item not found")

        fields = data.model_dump(exclude_unset=True)
        claimer = fields.get("claimed_by")
        if claimer and get_membership(session, trip_id, claimer) is None:
            raise ValidationError("Supplies can only be claimed by trip members")

        for key, value in fields.items():
            setattr(supply, key, value)
        session.flush()
        # claimer was loaded with the row; reload it for the new claimed_by
        session.expire(supply, ["claimer"])
        record = SupplyRecord.from_row(supply)
        event = change("supply_items", ChangeKind.UPDATE, supply)

    ctx.publish(event)
    return record


def delete_supply(ctx: RequestContext, trip_id: str, supply_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        supply = session.scalar(select(SupplyItem).where(SupplyItem.id == supply_id, SupplyItem.trip_id == trip_id))
        if supply is None:
            raise NotFoundError("Supply item not found")
        event = change("supply_items", ChangeKind.DELETE, supply)
        session.delete(supply)

    ctx.publish(event)
