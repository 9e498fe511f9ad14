from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from tripsync.models.common import UserSummary, user_summary


class CreateAvailabilityRequest(BaseModel):
    start_date: date
    end_date: date
    notes: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_dates(self) -> "CreateAvailabilityRequest":
        if self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class AvailabilityRecord(BaseModel):
    id: str
    trip_id: str
    user_id: str
    start_date: date
    end_date: date
    notes: str | None = None
    created_at: datetime
    user: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "AvailabilityRecord":
        return cls(
            id=row.id,
            trip_id=row.trip_id,
            user_id=row.user_id,
            start_date=row.start_date,
            end_date=row.end_date,
            notes=row.notes,
            created_at=row.created_at,
            user=user_summary(row.user),
        )
