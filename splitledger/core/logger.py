"""
Logging configuration for Split Ledger.
Provides structured logging with different levels and outputs.
"""

import functools
import logging
import sys
import time
from typing import Optional

from loguru import logger

from .config import settings


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure application logging.

    Not called on import; the host application opts in.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    if log_level is None:
        log_level = settings.log_level.upper()
    if log_file is None:
        log_file = settings.log_file

    # Remove default loguru handler
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stdout,
        format=log_format,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.is_development
    )

    if log_file:
        logger.add(
            log_file,
            format=log_format,
            level=log_level,
            rotation="1 day",
            retention="30 days",
            compression="zip",
            backtrace=True,
            diagnose=False
        )

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.debug(f"Logging configured - Level: {log_level}, Environment: {settings.environment}")


def get_logger(name: str) -> "logger":
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


# =============================================================================
# LOGGING UTILITIES
# =============================================================================

def log_function_call(func):
    """Decorator to log function calls and execution time at debug level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_logger = get_logger(func.__module__)
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            func_logger.error(
                f"{func.__name__} failed after {execution_time:.3f}s: {str(e)}"
            )
            raise

        if settings.debug:
            execution_time = time.perf_counter() - start_time
            func_logger.debug(f"{func.__name__} completed in {execution_time:.3f}s")
        return result

    return wrapper
