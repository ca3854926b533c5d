import datetime as dt
from typing import Any, Optional

import email_validator
from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingRequest(BaseModel):
    """Create-booking payload after validation and defaulting."""
    model_config = ConfigDict(extra="forbid")

    homestay_id: str = Field(..., min_length=1, max_length=255)
    date: dt.date
    time_slot: str = Field(..., min_length=1, max_length=100)
    guest_name: str = Field(..., min_length=2, max_length=200)
    phone: str = Field(..., min_length=7, max_length=20)
    email: Optional[str] = None
    address: Optional[str] = Field(None, max_length=1000)
    guests: int = Field(1, ge=1, le=20)
    special_requests: Optional[str] = Field(None, max_length=1000)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_iso_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        if not isinstance(value, str):
            raise ValueError("must be an ISO-8601 date string")
        try:
            return isoparse(value).date()
        except (ValueError, OverflowError):
            raise ValueError(f"'{value}' is not a valid ISO-8601 date")

    @field_validator("guests", mode="before")
    @classmethod
    def _reject_bool_guests(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer")
        return value

    @field_validator("email", "address", "special_requests", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        try:
            email_validator.validate_email(value, check_deliverability=False)
        except email_validator.EmailNotValidError as e:
            raise ValueError(f"must be a valid email ({e})")
        # stored as submitted, not normalized
        return value


class BookingCreated(BaseModel):
    """Response body for a newly created booking."""
    success: bool = True
    id: int
    createdAt: dt.datetime


class BookingRecord(BaseModel):
    """A stored booking as returned to administrators."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    homestay_id: str
    date: dt.date
    time_slot: str
    guest_name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    guests: int
    special_requests: Optional[str] = None
    created_at: dt.datetime
