from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from tripsync.models.common import user_summary


class CreateTeeTimeRequest(BaseModel):
    course_name: str = Field(..., min_length=1, max_length=200)
    course_location: str | None = Field(default=None, max_length=200)
    tee_time: datetime
    num_players: int = Field(default=4, ge=1, le=8)
    notes: str | None = Field(default=None, max_length=1000)


class TeeTimeRecord(BaseModel):
    id: str
    course_name: str
    course_location: str | None = None
    tee_time: datetime
    num_players: int
    notes: str | None = None
    created_by: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "TeeTimeRecord":
        return cls(
            id=row.id,
            course_name=row.course_name,
            course_location=row.course_location,
            tee_time=row.tee_time,
            num_players=row.num_players,
            notes=row.notes,
            created_by=row.created_by,
            created_at=row.created_at,
        )


class RecordScoreRequest(BaseModel):
    tee_time_id: str = Field(..., min_length=1)
    score: int = Field(..., ge=1, le=200)
    handicap: int | None = Field(default=None, ge=-10, le=54)


class ScoreRecord(BaseModel):
    id: str
    user_id: str
    user_name: str
    score: int
    handicap: int | None = None
    tee_time_id: str
    course_name: str

    @classmethod
    def from_row(cls, row: Any) -> "ScoreRecord":
        return cls(
            id=row.id,
            user_id=row.user_id,
            user_name=user_summary(row.player).name,
            score=row.score,
            handicap=row.handicap,
            tee_time_id=row.tee_time_id,
            course_name=row.tee_time.course_name if row.tee_time else "Unknown Course",
        )
