from typing import Optional, List, Dict
from pydantic import BaseModel


class ForecastPoint(BaseModel):
    period: str
    raw_count: Optional[int] = None  # None for projected points
    smoothed_value: float
    projected: bool = False


class TimeSlotTrend(BaseModel):
    points: List[ForecastPoint]
    busy_events: int = 0  # bookings paid in full at or above the busy threshold


class ResourceEstimate(BaseModel):
    seating: int = 0
    catering: int = 0
    staff: int = 0

    @property
    def total(self) -> int:
        return self.seating + self.catering + self.staff


class InventoryEstimate(BaseModel):
    food: int = 0
    drinks: int = 0
    materials: float = 0.0

    @property
    def total(self) -> float:
        return self.food + self.drinks


class BookingEstimate(BaseModel):
    booking_id: str
    resources: ResourceEstimate
    inventory: InventoryEstimate


class EventTypeForecast(BaseModel):
    event_type: str
    resources: ResourceEstimate
    inventory: InventoryEstimate


class ResourceInsights(BaseModel):
    total_resources: ResourceEstimate
    average_resources: Dict[str, float]
    predicted_resources: Dict[str, float]
    total_inventory: InventoryEstimate
    average_inventory: Dict[str, float]
    predicted_inventory: Dict[str, float]


class ResourceForecast(BaseModel):
    groups: List[EventTypeForecast]
    inventory_groups: List[EventTypeForecast] = []
    insights: Optional[ResourceInsights] = None


class PricingQuote(BaseModel):
    multiplier: float
    base_price: float
    suggested_price: float


class PeakHour(BaseModel):
    hour: str
    count: int


class CheckInPatterns(BaseModel):
    points: List[ForecastPoint]
    peak_hours: List[PeakHour]


class AttendanceSummary(BaseModel):
    booking_id: str
    total_attendees: int
    total_people: int
