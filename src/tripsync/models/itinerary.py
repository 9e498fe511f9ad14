import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tripsync.models.common import TIME_PATTERN, UserSummary, user_summary


class CreateItineraryItemRequest(BaseModel):
    date: dt.date
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    location: str | None = Field(default=None, max_length=200)
    sort_order: int = 0


class UpdateItineraryItemRequest(BaseModel):
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    title: str | None = Field(default=None, min_length=3, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    location: str | None = Field(default=None, max_length=200)
    sort_order: int | None = None


class ItineraryItemRecord(BaseModel):
    id: str
    title: str
    description: str | None = None
    location: str | None = None
    date: dt.date
    time: str | None = None
    sort_order: int = 0
    created_at: dt.datetime
    created_by: str | None = None
    author: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "ItineraryItemRecord":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            location=row.location,
            date=row.date,
            time=row.time,
            sort_order=row.sort_order,
            created_at=row.created_at,
            created_by=row.created_by,
            author=user_summary(row.author),
        )


class CreateCommentRequest(BaseModel):
    itinerary_item_id: str = Field(..., min_length=1)
    text: str = Field(..., max_length=500)

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment cannot be empty")
        return value


class CommentRecord(BaseModel):
    id: str
    text: str
    itinerary_item_id: str
    created_at: dt.datetime
    user_id: str
    author: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "CommentRecord":
        return cls(
            id=row.id,
            text=row.text,
            itinerary_item_id=row.itinerary_item_id,
            created_at=row.created_at,
            user_id=row.user_id,
            author=user_summary(row.author),
        )
