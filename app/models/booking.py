import re
from typing import Optional, List, Dict, Any
from datetime import datetime, time
from enum import Enum
from pydantic import BaseModel, Field, ValidationError, field_validator

from app.core.exceptions import MalformedBooking


class LifecycleStatus(str, Enum):
    PENDING = "pending"
    ONGOING = "ongoing"
    DONE = "done"


class Booking(BaseModel):
    id: str
    name: Optional[str] = None
    event_type: Optional[str] = None
    event_theme: Optional[str] = None
    menu_package: Optional[str] = None
    event_date: datetime
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    num_attendees: int = Field(ge=0)
    contact_number: Optional[str] = None
    email: Optional[str] = None
    payment_method: Optional[str] = None
    full_payment: Optional[float] = None
    notes: Optional[str] = None
    scanned_count: int = Field(default=0, ge=0)
    status: Optional[LifecycleStatus] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        # Supabase hands back integer primary keys
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("scanned_count", mode="before")
    @classmethod
    def _default_scanned(cls, value):
        return 0 if value is None else value

    @field_validator("full_payment", mode="before")
    @classmethod
    def _decode_amount(cls, value):
        # Amounts are stored as display text, e.g. "₱5,000.00"
        if value is None or isinstance(value, (int, float)):
            return value
        cleaned = re.sub(r"[^\d.\-]", "", str(value))
        try:
            return float(cleaned)
        except ValueError:
            return None

    @field_validator("status", mode="before")
    @classmethod
    def _lenient_status(cls, value):
        # The remote status is informational only; unknown values are dropped
        if value in {s.value for s in LifecycleStatus}:
            return value
        return None


class Attendee(BaseModel):
    id: Optional[str] = None
    booking_id: Optional[str] = None
    name: Optional[str] = None
    num_people: int = Field(default=0, ge=0)
    scanned_at: Optional[datetime] = None

    @field_validator("id", "booking_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("num_people", mode="before")
    @classmethod
    def _default_people(cls, value):
        return 0 if value is None else value


class LifecycleState(BaseModel):
    """The three lifecycle buckets, as persisted in the local snapshot."""
    pending: List[Booking] = Field(default_factory=list)
    ongoing: List[Booking] = Field(default_factory=list)
    done: List[Booking] = Field(default_factory=list)

    def bucket(self, status: LifecycleStatus) -> List[Booking]:
        return getattr(self, status.value)

    def all_bookings(self) -> List[Booking]:
        return [*self.pending, *self.ongoing, *self.done]


def decode_booking(raw: Dict[str, Any]) -> Booking:
    """
    Validates one raw remote record.
    Raises MalformedBooking when id, event_date or num_attendees is missing or invalid.
    """
    raw_id = raw.get("id")
    try:
        return Booking.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedBooking(str(raw_id) if raw_id is not None else None, f"invalid fields: {fields}") from e


def decode_attendee(raw: Dict[str, Any]) -> Optional[Attendee]:
    try:
        return Attendee.model_validate(raw)
    except ValidationError:
        return None
