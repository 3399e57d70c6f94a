from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Venue Bookings Backend"

    # Server
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # Supabase (remote booking store)
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    BOOKINGS_TABLE: str = "bookings"
    ATTENDEES_TABLE: str = "attendees"

    # Local lifecycle snapshot
    SNAPSHOT_PATH: str = "data/lifecycle_snapshot.json"
    SNAPSHOT_KEY: str = "bookings"

    # Lifecycle scheduler
    VENUE_TIMEZONE: str = "Asia/Manila"
    LIFECYCLE_TICK_SECONDS: int = 300

    # Forecasting
    FORECAST_WINDOW: int = 3
    FORECAST_ALPHA: float = 0.5
    FORECAST_GROWTH_FACTOR: float = 1.05
    BASE_EVENT_PRICE: float = 100.0
    BUSY_EVENT_PAYMENT: float = 5000.0

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "logs/errors.log"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
