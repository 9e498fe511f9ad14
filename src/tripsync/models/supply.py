from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from tripsync.models.common import UserSummary, user_summary

SupplyCategory = Literal["food_drinks", "gear_equipment", "kitchen_cooking", "entertainment", "toiletries", "other"]
SupplyStatus = Literal["needed", "claimed", "packed"]


class CreateSupplyRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: SupplyCategory
    quantity: int = Field(default=1, ge=1)
    cost: float | None = Field(default=None, ge=0)


class UpdateSupplyRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: SupplyCategory | None = None
    quantity: int | None = Field(default=None, ge=1)
    cost: float | None = Field(default=None, ge=0)
    status: SupplyStatus | None = None
    claimed_by: str | None = None


class SupplyRecord(BaseModel):
    id: str
    trip_id: str
    name: str
    description: str | None = None
    category: SupplyCategory
    quantity: int
    status: SupplyStatus
    cost: float | None = None
    claimed_by: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    claimer: UserSummary | None = None
    creator: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "SupplyRecord":
        return cls(
            id=row.id,
            trip_id=row.trip_id,
            name=row.name,
            description=row.description,
            category=row.category,
            quantity=row.quantity,
            status=row.status,
            cost=row.cost,
            claimed_by=row.claimed_by,
            created_by=row.created_by,
            created_at=row.created_at,
            updated_at=row.updated_at,
            claimer=user_summary(row.claimer) if row.claimed_by else None,
            creator=user_summary(row.creator),
        )
