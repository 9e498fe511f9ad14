import datetime as dt
from datetime import date, datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field, StrictBool, model_validator

from tripsync.models.common import UserSummary, user_summary

TripType = Literal["general", "golf", "ski", "bachelor_party", "bachelorette_party"]
TripStatus = Literal["planning", "confirmed", "completed", "cancelled"]
MemberRole = Literal["organizer", "member"]
RsvpStatus = Literal["pending", "accepted", "declined", "maybe"]


def _today() -> date:
    return datetime.now(timezone.utc).date()


class CreateTripRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    destination: str = Field(..., min_length=2, max_length=100)
    start_date: date
    end_date: date
    description: str | None = Field(default=None, max_length=1000)
    budget_total: float | None = Field(default=None, ge=0)
    trip_type: TripType = "general"

    @model_validator(mode="after")
    def check_dates(self) -> "CreateTripRequest":
        if self.start_date <= _today():
            raise ValueError("Start date must be in the future")
        if self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class UpdateTripRequest(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=100)
    destination: str | None = Field(default=None, min_length=2, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = Field(default=None, max_length=1000)
    budget_total: float | None = Field(default=None, ge=0)
    status: TripStatus | None = None
    trip_type: TripType | None = None
    proposal_enabled: bool | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "UpdateTripRequest":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class JoinTripRequest(BaseModel):
    rsvp_status: RsvpStatus = "accepted"


class ProposalToggleRequest(BaseModel):
    proposal_enabled: StrictBool


class MemberRecord(BaseModel):
    id: str
    user_id: str
    role: MemberRole
    rsvp_status: RsvpStatus
    budget_cap: float | None = None
    joined_at: datetime
    profile: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "MemberRecord":
        return cls(
            id=row.id,
            user_id=row.user_id,
            role=row.role,
            rsvp_status=row.rsvp_status,
            budget_cap=row.budget_cap,
            joined_at=row.joined_at,
            profile=user_summary(row.profile),
        )


class TripRecord(BaseModel):
    id: str
    title: str
    destination: str
    trip_type: TripType
    start_date: date
    end_date: date
    description: str | None = None
    budget_total: float | None = None
    status: TripStatus
    proposal_enabled: bool = False
    invite_code: str
    created_by: str
    created_at: datetime
    members: list[MemberRecord] = []

    @classmethod
    def from_row(cls, row: Any, *, with_members: bool = True) -> "TripRecord":
        return cls(
            id=row.id,
            title=row.title,
            destination=row.destination,
            trip_type=row.trip_type,
            start_date=row.start_date,
            end_date=row.end_date,
            description=row.description,
            budget_total=row.budget_total,
            status=row.status,
            proposal_enabled=row.proposal_enabled,
            invite_code=row.invite_code,
            created_by=row.created_by,
            created_at=row.created_at,
            members=[MemberRecord.from_row(m) for m in row.members] if with_members else [],
        )


class TripSummary(BaseModel):
    """Restricted field set served to holders of an invite code."""

    id: str
    title: str
    destination: str
    start_date: date
    end_date: date
    description: str | None = None
    status: TripStatus
    invite_code: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "TripSummary":
        return cls(
            id=row.id,
            title=row.title,
            destination=row.destination,
            start_date=row.start_date,
            end_date=row.end_date,
            description=row.description,
            status=row.status,
            invite_code=row.invite_code,
            created_at=row.created_at,
        )


class ProposalTrip(BaseModel):
    title: str
    destination: str
    start_date: date
    end_date: date
    description: str | None = None
    budget_total: float | None = None
    trip_type: TripType
    status: TripStatus
    invite_code: str
    member_count: int
    accepted_count: int


class ProposalCategory(BaseModel):
    id: str
    name: str
    estimated_cost: float
    split_type: str


class ProposalItineraryItem(BaseModel):
    id: str
    title: str
    description: str | None = None
    date: dt.date
    time: str | None = None
    location: str | None = None


class ProposalView(BaseModel):
    trip: ProposalTrip
    categories: list[ProposalCategory]
    itinerary: list[ProposalItineraryItem]
