from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tripsync.models.trip import MemberRole

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class AddMemberRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    name: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UpdateMemberRequest(BaseModel):
    role: MemberRole | None = None
    budget_cap: float | None = Field(default=None, ge=0)


class BudgetCapRequest(BaseModel):
    budget_cap: float | None = Field(..., ge=0)


class PendingInviteRecord(BaseModel):
    id: str
    email: str
    name: str | None = None
    invited_by: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "PendingInviteRecord":
        return cls(id=row.id, email=row.email, name=row.name, invited_by=row.invited_by, created_at=row.created_at)
