import logging
import sys
from typing import Optional
from fileqa.core.config import settings


def setup_logger(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the service logger.

    Without an explicit level an already configured logger is returned
    unchanged, so module-level calls keep the level chosen at startup.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            defaults to LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("fileqa")
    if log_level is None and logger.handlers:
        return logger

    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper())
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
