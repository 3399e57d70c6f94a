from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_analytics_service, get_lifecycle_service, get_scheduler
from app.models.booking import LifecycleStatus
from app.services.analytics_service import AnalyticsService
from app.services.lifecycle_service import BookingLifecycleService
from app.services.scheduler_service import LifecycleScheduler

router = APIRouter()

class MoveBookingRequest(BaseModel):
    status: LifecycleStatus

class MenuPackageRequest(BaseModel):
    menu_package: str

@router.get("/bookings")
async def list_bookings(service: BookingLifecycleService = Depends(get_lifecycle_service)):
    return service.buckets()

@router.post("/bookings/{booking_id}/move")
async def move_booking(
    booking_id: str,
    req: MoveBookingRequest,
    service: BookingLifecycleService = Depends(get_lifecycle_service),
):
    booking = await service.move_booking(booking_id, req.status)
    return {"message": f"Booking moved to {req.status.value}", "booking": booking}

@router.patch("/bookings/{booking_id}/menu-package")
async def update_menu_package(
    booking_id: str,
    req: MenuPackageRequest,
    service: BookingLifecycleService = Depends(get_lifecycle_service),
):
    booking = await service.update_menu_package(booking_id, req.menu_package)
    return {"message": "Menu package updated", "booking": booking}

@router.delete("/bookings/{booking_id}")
async def cancel_booking(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_lifecycle_service),
):
    await service.cancel_booking(booking_id)
    return {"success": True, "message": f"Booking {booking_id} cancelled"}

@router.get("/bookings/{booking_id}/attendees")
async def booking_attendance(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_lifecycle_service),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    service.get(booking_id)
    return await analytics.attendance(booking_id)

@router.get("/bookings/{booking_id}/estimate")
async def booking_estimate(
    booking_id: str,
    service: BookingLifecycleService = Depends(get_lifecycle_service),
):
    return AnalyticsService.estimate(service.get(booking_id))

@router.post("/lifecycle/tick")
async def run_tick(scheduler: LifecycleScheduler = Depends(get_scheduler)):
    transitions = await scheduler.run_once()
    return {
        "moved": [
            {"booking_id": t.booking_id, "from": t.source.value, "to": t.target.value}
            for t in transitions
        ]
    }
