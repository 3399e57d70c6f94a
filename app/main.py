from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import BookingNotFound, StoreUnavailable
from app.api import analytics, bookings
from app.core.logger import setup_logging, logger
from app.services.analytics_service import AnalyticsService
from app.services.db_service import booking_store
from app.services.lifecycle_service import BookingLifecycleService
from app.services.reconciliation_service import reconcile
from app.services.scheduler_service import LifecycleScheduler
from app.services.snapshot_service import SnapshotStore
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Starting Venue Bookings Backend")

    # Reconciliation completes (or fails) before the first tick sees the buckets
    lifecycle, result = await reconcile(booking_store, SnapshotStore())
    if not result.ok:
        logger.warning("⚠️ Running on local snapshot only until the next restart")

    service = BookingLifecycleService(lifecycle, booking_store)
    scheduler = LifecycleScheduler(service)
    app.state.lifecycle_service = service
    app.state.scheduler = scheduler
    app.state.analytics_service = AnalyticsService(booking_store)
    scheduler.start()
    yield
    # Shutdown
    await scheduler.stop()
    logger.info("🛑 Shutting down backend")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan
)

@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error(f"❌ {exc}")
    return JSONResponse(
        status_code=503,
        content={"message": "Booking store unavailable", "detail": str(exc)}
    )

@app.exception_handler(BookingNotFound)
async def booking_not_found_handler(request: Request, exc: BookingNotFound):
    return JSONResponse(status_code=404, content={"message": str(exc)})

@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"message": str(exc)})

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🔥 UNHANDLED ERROR: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error", "detail": "An unexpected error occurred. Please contact support."}
    )

# Include routers
app.include_router(bookings.router, tags=["Bookings"])
app.include_router(analytics.router, tags=["Analytics"])

@app.get("/")
async def health_check():
    return {'status': 'active', 'time': datetime.now().isoformat()}

@app.get("/health")
async def health_check_std():
    return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
