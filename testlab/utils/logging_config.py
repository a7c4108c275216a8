"""
Centralized logging configuration for the TestLab front end
"""
import logging
import sys
from typing import Optional


def setup_application_logging(level: str = "INFO", force_flush: bool = True) -> logging.Logger:
    """
    Setup application-wide logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        force_flush: Whether to force immediate flushing of stdout
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True
    )

    # Every backend call goes through httpx; its per-request INFO lines drown the app logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if force_flush and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(line_buffering=True)

    logger = logging.getLogger(__name__)
    logger.info(f"Application logging configured at {level} level")

    return logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with consistent formatting

    Args:
        name: Logger name (usually __name__)
        level: Optional specific level for this logger

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def log_error_with_context(error: Exception, context: str, logger: logging.Logger) -> None:
    """
    Log an unexpected error with its traceback

    Args:
        error: The exception that occurred
        context: Where/when the error occurred
        logger: Logger instance to use
    """
    logger.error(f"{context}: {error}", exc_info=error)
