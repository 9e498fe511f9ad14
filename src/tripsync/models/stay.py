from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from tripsync.models.common import UserSummary, user_summary

DocumentCategory = Literal["accommodation", "reservation", "activity", "flight", "other"]

URL_PATTERN = r"^https?://\S+$"


class AccommodationRequest(BaseModel):
    """Full replacement of a trip's accommodation; omitted fields are cleared."""

    name: str | None = Field(default=None, max_length=200)
    address: str | None = Field(default=None, max_length=500)
    check_in: datetime | None = None
    check_out: datetime | None = None
    door_code: str | None = Field(default=None, max_length=50)
    wifi_name: str | None = Field(default=None, max_length=100)
    wifi_password: str | None = Field(default=None, max_length=100)
    house_rules: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_stay(self) -> "AccommodationRequest":
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError("Check-out must be after check-in")
        return self


class AccommodationRecord(BaseModel):
    id: str
    trip_id: str
    name: str | None = None
    address: str | None = None
    check_in: datetime | None = None
    check_out: datetime | None = None
    door_code: str | None = None
    wifi_name: str | None = None
    wifi_password: str | None = None
    house_rules: str | None = None
    notes: str | None = None
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "AccommodationRecord":
        return cls(
            id=row.id,
            trip_id=row.trip_id,
            name=row.name,
            address=row.address,
            check_in=row.check_in,
            check_out=row.check_out,
            door_code=row.door_code,
            wifi_name=row.wifi_name,
            wifi_password=row.wifi_password,
            house_rules=row.house_rules,
            notes=row.notes,
            updated_at=row.updated_at,
        )


class CreateDocumentRequest(BaseModel):
    title: str = Field(..., max_length=200)
    url: str = Field(..., pattern=URL_PATTERN, max_length=2048)
    description: str | None = Field(default=None, max_length=1000)
    category: DocumentCategory = "other"

    @field_validator("title", "url", mode="before")
    @classmethod
    def strip_required(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Title and URL are required")
        return value


class DocumentRecord(BaseModel):
    id: str
    trip_id: str
    title: str
    url: str
    description: str | None = None
    category: DocumentCategory
    created_by: str
    created_at: datetime
    creator: UserSummary

    @classmethod
    def from_row(cls, row: Any) -> "DocumentRecord":
        return cls(
            id=row.id,
            trip_id=row.trip_id,
            title=row.title,
            url=row.url,
            description=row.description,
            category=row.category,
            created_by=row.created_by,
            created_at=row.created_at,
            creator=user_summary(row.creator),
        )
