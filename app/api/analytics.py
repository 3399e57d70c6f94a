from fastapi import APIRouter, Depends, Query

from app.analytics.forecast import Period
from app.analytics.smoothing import SmoothingMethod
from app.api.deps import get_analytics_service
from app.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics")

@router.get("/trend")
async def booking_trend(
    period: Period = Period.YEAR,
    method: SmoothingMethod = SmoothingMethod.SMA,
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.booking_trend(period, method)

@router.get("/time-slots")
async def time_slot_trend(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await analytics.time_slot_trend()

@router.get("/check-ins")
async def check_in_patterns(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await analytics.check_in_patterns()

@router.get("/resources")
async def resource_forecast(
    top: int = Query(5, ge=1, le=100),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.resource_forecast(top)

@router.get("/pricing")
async def pricing(
    method: SmoothingMethod = SmoothingMethod.SMA,
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.pricing(method)

@router.get("/supplies")
async def supply_allocation(analytics: AnalyticsService = Depends(get_analytics_service)):
    allocations = await analytics.supply_allocation()
    return {day.isoformat(): supplies for day, supplies in allocations.items()}
