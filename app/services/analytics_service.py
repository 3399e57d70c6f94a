from datetime import date
from typing import Dict, List, Optional

from app.analytics.estimator import allocate_supplies, estimate_booking, forecast_by_event_type
from app.analytics.forecast import Period, build_forecast, peak_periods
from app.analytics.pricing import pricing_multiplier
from app.analytics.smoothing import SmoothingMethod
from app.core.clock import to_local
from app.core.config import settings
from app.core.config_loader import get_supply_rates, load_venue_config
from app.core.logger import logger
from app.models.analytics import (
    AttendanceSummary,
    BookingEstimate,
    CheckInPatterns,
    ForecastPoint,
    PricingQuote,
    ResourceForecast,
    TimeSlotTrend,
)
from app.models.booking import Booking


class AnalyticsService:
    """Fetches bookings from the remote store and runs the forecasting functions on them."""

    def __init__(self, booking_store, config: Optional[dict] = None):
        self.booking_store = booking_store
        self.config = config if config is not None else load_venue_config()

    async def booking_trend(
        self,
        period: Period = Period.YEAR,
        method: SmoothingMethod = SmoothingMethod.SMA,
    ) -> List[ForecastPoint]:
        if period not in (Period.MONTH, Period.YEAR):
            raise ValueError("booking trend is available per month or per year")
        bookings = await self.booking_store.list_bookings()
        return build_forecast(
            [to_local(b.event_date) for b in bookings],
            period,
            method=method,
            window=settings.FORECAST_WINDOW,
            alpha=settings.FORECAST_ALPHA,
            growth_factor=settings.FORECAST_GROWTH_FACTOR,
        )

    async def time_slot_trend(self) -> TimeSlotTrend:
        bookings = await self.booking_store.list_bookings()
        points = build_forecast(
            [b.start_time for b in bookings if b.start_time is not None],
            Period.TIME_SLOT,
            method=SmoothingMethod.SMA,
            window=settings.FORECAST_WINDOW,
        )
        busy = sum(
            1 for b in bookings
            if b.full_payment is not None and b.full_payment >= settings.BUSY_EVENT_PAYMENT
        )
        return TimeSlotTrend(points=points, busy_events=busy)

    async def check_in_patterns(self) -> CheckInPatterns:
        attendees = await self.booking_store.list_all_attendees()
        scans = [
            to_local(a.scanned_at)
            for a in attendees if a.scanned_at is not None
        ]
        return CheckInPatterns(
            points=build_forecast(scans, Period.HOUR, method=SmoothingMethod.WMA, window=settings.FORECAST_WINDOW),
            peak_hours=peak_periods(scans, Period.HOUR, limit=5),
        )

    async def pricing(self, method: SmoothingMethod = SmoothingMethod.SMA) -> PricingQuote:
        trend = await self.booking_trend(Period.YEAR, method)
        if not trend:
            raise ValueError("no bookings to price against")
        multiplier = pricing_multiplier([p.smoothed_value for p in trend])
        logger.info(f"💰 Pricing multiplier {multiplier:.4f} from {len(trend)} periods")
        return PricingQuote(
            multiplier=multiplier,
            base_price=settings.BASE_EVENT_PRICE,
            suggested_price=round(settings.BASE_EVENT_PRICE * multiplier, 2),
        )

    async def resource_forecast(self, top: Optional[int] = 5) -> ResourceForecast:
        bookings = await self.booking_store.list_bookings()
        return forecast_by_event_type(bookings, top=top)

    async def supply_allocation(self) -> Dict[date, Dict[str, int]]:
        bookings = await self.booking_store.list_bookings()
        return allocate_supplies(bookings, get_supply_rates(self.config))

    async def attendance(self, booking_id: str) -> AttendanceSummary:
        attendees = await self.booking_store.list_attendees(booking_id)
        return AttendanceSummary(
            booking_id=booking_id,
            total_attendees=len(attendees),
            total_people=sum(a.num_people for a in attendees),
        )

    @staticmethod
    def estimate(booking: Booking) -> BookingEstimate:
        return estimate_booking(booking)
