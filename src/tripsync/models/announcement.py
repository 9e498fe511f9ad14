from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, StrictBool

from tripsync.models.common import UserSummary, user_summary


class CreateAnnouncementRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    is_pinned: bool = False


class PinAnnouncementRequest(BaseModel):
    is_pinned: StrictBool


class AnnouncementRecord(BaseModel):
    id: str
    trip_id: str
    title: str
    content: str
    is_pinned: bool
    created_by: str
    created_at: datetime
    updated_at: datetime
    author: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "AnnouncementRecord":
        return cls(
            id=row.id,
            trip_id=row.trip_id,
            title=row.title,
            content=row.content,
            is_pinned=row.is_pinned,
            created_by=row.created_by,
            created_at=row.created_at,
            updated_at=row.updated_at,
            author=user_summary(row.author),
        )
