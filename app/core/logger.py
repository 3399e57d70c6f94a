import sys
from loguru import logger
import logging

from app.core.config import settings

# Every line carries the booking it concerns; "-" for venue-wide events
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>booking={extra[booking_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
ERROR_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | booking={extra[booking_id]} | {name}:{function}:{line} - {message}"

NOISY_LOGGERS = ("uvicorn.access", "httpx", "hpack", "postgrest")


class InterceptHandler(logging.Handler):
    """Routes stdlib records (uvicorn, supabase, the "app" logger) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def for_booking(booking_id):
    """Logger bound to one booking, so its lines can be grepped out of the error log."""
    return logger.bind(booking_id=str(booking_id))


def setup_logging():
    logger.remove()
    logger.configure(extra={"booking_id": "-"})

    logger.add(sys.stdout, level=settings.LOG_LEVEL, format=CONSOLE_FORMAT)

    # Errors also go to a rotating file for the operators
    logger.add(
        settings.ERROR_LOG_PATH,
        level="ERROR",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=ERROR_FORMAT,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["logger", "for_booking", "setup_logging"]
