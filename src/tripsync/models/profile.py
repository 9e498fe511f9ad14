from typing import Any

from pydantic import BaseModel, Field, field_validator


class PaymentProfile(BaseModel):
    venmo_handle: str | None = Field(default=None, max_length=100)
    zelle_email: str | None = Field(default=None, max_length=255)
    cashapp_handle: str | None = Field(default=None, max_length=100)

    @field_validator("venmo_handle", "zelle_email", "cashapp_handle")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @classmethod
    def from_row(cls, row: Any) -> "PaymentProfile":
        return cls(venmo_handle=row.venmo_handle, zelle_email=row.zelle_email, cashapp_handle=row.cashapp_handle)
