from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from tripsync.models.common import UserSummary, user_summary

SplitType = Literal["equal", "custom", "none"]


class SplitInput(BaseModel):
    user_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)


class CreateBudgetCategoryRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    estimated_cost: float = Field(..., ge=0)
    split_type: SplitType = "equal"
    description: str | None = Field(default=None, max_length=500)
    sort_order: int = 0
    custom_splits: list[SplitInput] = []


class UpdateBudgetCategoryRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    estimated_cost: float | None = Field(default=None, ge=0)
    split_type: SplitType | None = None
    description: str | None = Field(default=None, max_length=500)
    sort_order: int | None = None
    custom_splits: list[SplitInput] | None = None


class BudgetSplitRecord(BaseModel):
    id: str
    user_id: str
    amount: float
    profile: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "BudgetSplitRecord":
        return cls(id=row.id, user_id=row.user_id, amount=row.amount, profile=user_summary(row.profile))


class BudgetCategoryRecord(BaseModel):
    id: str
    name: str
    estimated_cost: float
    split_type: SplitType
    description: str | None = None
    sort_order: int = 0
    created_at: datetime
    splits: list[BudgetSplitRecord] = []

    @classmethod
    def from_row(cls, row: Any) -> "BudgetCategoryRecord":
        return cls(
            id=row.id,
            name=row.name,
            estimated_cost=row.estimated_cost,
            split_type=row.split_type,
            description=row.description,
            sort_order=row.sort_order,
            created_at=row.created_at,
            splits=[BudgetSplitRecord.from_row(s) for s in row.splits],
        )
