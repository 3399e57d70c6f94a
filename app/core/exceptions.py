"""Error taxonomy shared by the booking core."""
from typing import Optional


class BookingError(Exception):
    """Base class for recoverable booking-core errors."""


class StoreUnavailable(BookingError):
    """The remote booking store could not complete an operation."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Remote store unavailable during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SnapshotCorrupt(BookingError):
    """The local lifecycle snapshot is unreadable or malformed."""


class MalformedBooking(BookingError):
    """A remote record could not be decoded into a Booking."""

    def __init__(self, booking_id: Optional[str], reason: str):
        self.booking_id = booking_id
        self.reason = reason
        super().__init__(f"Malformed booking {booking_id or '<no id>'}: {reason}")


class BookingNotFound(BookingError):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking {booking_id} not found")
