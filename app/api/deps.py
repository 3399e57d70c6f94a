from fastapi import Request

from app.services.analytics_service import AnalyticsService
from app.services.lifecycle_service import BookingLifecycleService
from app.services.scheduler_service import LifecycleScheduler


def get_lifecycle_service(request: Request) -> BookingLifecycleService:
    return request.app.state.lifecycle_service


def get_scheduler(request: Request) -> LifecycleScheduler:
    return request.app.state.scheduler


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service
