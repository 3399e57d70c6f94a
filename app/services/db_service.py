from typing import Any, List
from supabase import create_async_client, AsyncClient
from app.core.config import settings
from app.core.exceptions import MalformedBooking, StoreUnavailable
from app.models.booking import Attendee, Booking, decode_attendee, decode_booking
import logging

logger = logging.getLogger("app")

UPDATABLE_FIELDS = {
    "name", "event_type", "event_theme", "menu_package", "contact_number",
    "email", "payment_method", "notes", "scanned_count", "status",
}

class BookingStore:
    _instance = None
    _client: AsyncClient = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(BookingStore, cls).__new__(cls)
            # Async client init is tricky in __new__ (sync), will init on first usage
        return cls._instance

    async def get_client(self) -> AsyncClient:
        if not self._client:
            if not (settings.SUPABASE_URL and settings.SUPABASE_KEY):
                logger.warning("⚠️ Supabase credentials missing")
                raise StoreUnavailable("connect", "Supabase credentials missing")
            try:
                self._client = await create_async_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
                logger.info("✅ Supabase Async client initialized")
            except Exception as e:
                logger.error(f"❌ Failed to initialize Supabase Async: {e}")
                raise StoreUnavailable("connect", str(e)) from e
        return self._client

    async def list_bookings(self) -> List[Booking]:
        """
        Fetches every booking. Rows that fail validation are logged and left out,
        so they never reach lifecycle scheduling or forecasting.
        """
        client = await self.get_client()
        try:
            response = await client.table(settings.BOOKINGS_TABLE).select("*").execute()
        except Exception as e:
            logger.error(f"❌ DB Error (list_bookings): {e}")
            raise StoreUnavailable("list_bookings", str(e)) from e

        bookings = []
        for row in response.data or []:
            try:
                bookings.append(decode_booking(row))
            except MalformedBooking as e:
                logger.warning(f"⚠️ Skipping record: {e}")
        logger.info(f"📥 Fetched {len(bookings)} bookings ({len(response.data or []) - len(bookings)} rejected)")
        return bookings

    async def list_attendees(self, booking_id: str) -> List[Attendee]:
        client = await self.get_client()
        try:
            response = await client.table(settings.ATTENDEES_TABLE)\
                .select("*")\
                .eq('booking_id', booking_id)\
                .execute()
        except Exception as e:
            logger.error(f"❌ DB Error (list_attendees): {e}")
            raise StoreUnavailable("list_attendees", str(e)) from e
        return [a for a in (decode_attendee(row) for row in response.data or []) if a is not None]

    async def list_all_attendees(self) -> List[Attendee]:
        client = await self.get_client()
        try:
            response = await client.table(settings.ATTENDEES_TABLE).select("*").execute()
        except Exception as e:
            logger.error(f"❌ DB Error (list_all_attendees): {e}")
            raise StoreUnavailable("list_all_attendees", str(e)) from e
        return [a for a in (decode_attendee(row) for row in response.data or []) if a is not None]

    async def update_booking_field(self, booking_id: str, field: str, value: Any) -> None:
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be updated")

        client = await self.get_client()
        try:
            await client.table(settings.BOOKINGS_TABLE).update({field: value}).eq('id', booking_id).execute()
            logger.info(f"✏️ Booking {booking_id}: {field} updated")
        except Exception as e:
            logger.error(f"❌ DB Error (update_booking_field): {e}")
            raise StoreUnavailable("update_booking_field", str(e)) from e

    async def delete_booking(self, booking_id: str) -> None:
        """
        Deletes a booking's attendee rows, then the booking itself.
        The two deletes are not transactional: if the second fails the booking
        survives without attendees and StoreUnavailable is raised. Repeating the
        call finishes the job because deleting no attendees is a no-op.
        """
        client = await self.get_client()
        try:
            await client.table(settings.ATTENDEES_TABLE).delete().eq('booking_id', booking_id).execute()
        except Exception as e:
            logger.error(f"❌ DB Error (delete attendees of {booking_id}): {e}")
            raise StoreUnavailable("delete_booking", str(e)) from e

        try:
            await client.table(settings.BOOKINGS_TABLE).delete().eq('id', booking_id).execute()
        except Exception as e:
            logger.error(f"❌ DB Error (delete booking {booking_id}, attendees already removed): {e}")
            raise StoreUnavailable("delete_booking", f"attendees removed, booking kept: {e}") from e

        logger.info(f"🗑️ Booking {booking_id} and its attendees deleted from DB.")

booking_store = BookingStore()
