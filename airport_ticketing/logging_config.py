"""Centralized logging configuration."""
import sys
from loguru import logger as loguru_logger
from airport_ticketing.config import settings

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}::{function}:{line}</>",
        "{message}",
    )
)

# Remove default handler to avoid duplicate output and use custom format
loguru_logger.remove()
loguru_logger.add(sys.stderr, format=log_format, level=settings.LOG_LEVEL)

logger = loguru_logger
