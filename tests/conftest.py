from datetime import datetime, timedelta
from typing import List

import pytest

from app.core.clock import VENUE_TZ
from app.core.exceptions import StoreUnavailable
from app.models.booking import Attendee, Booking


class ManualClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeBookingStore:
    """In-memory stand-in for the Supabase-backed BookingStore."""

    def __init__(self, bookings: List[Booking] = (), attendees: List[Attendee] = ()):
        self.bookings = {b.id: b for b in bookings}
        self.attendees = list(attendees)
        self.updates = []
        self.fail = False

    def _check(self, operation):
        if self.fail:
            raise StoreUnavailable(operation, "simulated outage")

    async def list_bookings(self):
        self._check("list_bookings")
        return list(self.bookings.values())

    async def list_attendees(self, booking_id):
        self._check("list_attendees")
        return [a for a in self.attendees if a.booking_id == booking_id]

    async def list_all_attendees(self):
        self._check("list_all_attendees")
        return list(self.attendees)

    async def update_booking_field(self, booking_id, field, value):
        self._check("update_booking_field")
        self.updates.append((booking_id, field, value))

    async def delete_booking(self, booking_id):
        self._check("delete_booking")
        self.attendees = [a for a in self.attendees if a.booking_id != booking_id]
        self.bookings.pop(booking_id, None)


NOW = datetime(2024, 6, 15, 10, 30, tzinfo=VENUE_TZ)


def make_booking(booking_id: str, days_from_now: int = 0, **overrides) -> Booking:
    data = {
        "id": booking_id,
        "name": f"Booking {booking_id}",
        "event_type": "Birthday",
        "event_date": NOW + timedelta(days=days_from_now),
        "num_attendees": 20,
    }
    data.update(overrides)
    return Booking(**data)


@pytest.fixture
def clock():
    return ManualClock(NOW)
