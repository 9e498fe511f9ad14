import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from tripsync.models.budget import SplitInput
from tripsync.models.common import UserSummary, user_summary
from tripsync.utils.money import validate_custom_splits


def _today() -> dt.date:
    return dt.datetime.now(dt.timezone.utc).date()


class CreateExpenseRequest(BaseModel):
    description: str = Field(..., min_length=3, max_length=200)
    amount: float = Field(..., ge=0.01)
    category: str | None = Field(default=None, max_length=50)
    date: dt.date = Field(default_factory=_today)
    paid_by: str | None = None
    split_type: Literal["equal", "custom"] = "equal"
    custom_splits: list[SplitInput] = []

    @model_validator(mode="after")
    def check_custom_splits(self) -> "CreateExpenseRequest":
        if self.split_type != "custom":
            return self
        if not self.custom_splits:
            raise ValueError("custom_splits is required when split_type is custom")
        if not validate_custom_splits(self.custom_splits, self.amount):
            raise ValueError("custom_splits must add up to the expense amount")
        return self


class ExpenseSplitRecord(BaseModel):
    id: str
    user_id: str
    amount: float
    profile: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "ExpenseSplitRecord":
        return cls(id=row.id, user_id=row.user_id, amount=row.amount, profile=user_summary(row.profile))


class ExpenseRecord(BaseModel):
    id: str
    description: str
    amount: float
    category: str | None = None
    date: dt.date
    paid_by: str
    created_at: dt.datetime
    payer: UserSummary
    splits: list[ExpenseSplitRecord] = []

    @classmethod
    def from_row(cls, row: Any) -> "ExpenseRecord":
        return cls(
            id=row.id,
            description=row.description,
            amount=row.amount,
            category=row.category,
            date=row.date,
            paid_by=row.paid_by,
            created_at=row.created_at,
            payer=user_summary(row.payer),
            splits=[ExpenseSplitRecord.from_row(s) for s in row.splits],
        )


class BalanceRecord(BaseModel):
    user_id: str
    user_name: str
    net_balance: float


class SettlementRecord(BaseModel):
    from_user: str
    from_name: str
    to_user: str
    to_name: str
    amount: float
