import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from tripsync.models.common import TIME_PATTERN, UserSummary, user_summary

SuggestionStatus = Literal["pending", "approved", "rejected"]


class CreateSuggestionRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    location: str | None = Field(default=None, max_length=200)


class EditSuggestionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    location: str | None = Field(default=None, max_length=200)


class UpdateSuggestionStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: Literal["approved", "rejected"]


class SuggestionRecord(BaseModel):
    id: str
    title: str
    description: str | None = None
    date: dt.date | None = None
    time: str | None = None
    location: str | None = None
    status: SuggestionStatus
    suggested_by: str
    created_at: dt.datetime
    author: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "SuggestionRecord":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            date=row.date,
            time=row.time,
            location=row.location,
            status=row.status,
            suggested_by=row.suggested_by,
            created_at=row.created_at,
            author=user_summary(row.author),
        )
