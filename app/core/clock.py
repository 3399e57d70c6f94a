from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from app.core.config import settings

Clock = Callable[[], datetime]

VENUE_TZ = ZoneInfo(settings.VENUE_TIMEZONE)

def system_clock() -> datetime:
    return datetime.now(VENUE_TZ)

def to_local(moment: datetime, tz: ZoneInfo = VENUE_TZ) -> datetime:
    """Naive datetimes are taken to be venue-local already."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)

def local_day(moment: datetime, tz: ZoneInfo = VENUE_TZ) -> date:
    """Truncates an instant to its calendar day in the venue timezone."""
    return to_local(moment, tz).date()

def today(clock: Clock = system_clock, tz: ZoneInfo = VENUE_TZ) -> date:
    return local_day(clock(), tz)
