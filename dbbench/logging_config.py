"""
Centralized logging configuration for dbbench.

This module provides a consistent logging setup across the harness. Log
records go to stderr so they never interleave with the benchmark report,
which is written to stdout.
"""

import functools
import logging
import logging.config
import os
import sys
import time
from typing import Any, Dict


def get_log_level() -> str:
    """Get log level from environment variable or default to INFO."""
    return os.getenv("DBBENCH_LOG_LEVEL", "INFO").upper()


def get_log_format() -> str:
    """Get log format based on environment."""
    env = os.getenv("DBBENCH_ENV", "development").lower()

    if env == "production":
        return "%(asctime)s | %(name)s | %(levelname)s | %(message)s | %(pathname)s:%(lineno)d"
    else:
        return "%(asctime)s | %(name)-28s | %(levelname)-8s | %(message)s"


def get_logging_config() -> Dict[str, Any]:
    """Get the logging configuration dictionary."""
    log_level = get_log_level()
    log_format = get_log_format()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": sys.stderr,
            },
        },
        "loggers": {
            "dbbench": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "asyncpg": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }

    log_file = os.getenv("DBBENCH_LOG_FILE")
    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
        }
        config["loggers"]["dbbench"]["handlers"].append("file")

    return config


def setup_logging() -> None:
    """Setup logging configuration for the harness."""
    config = get_logging_config()
    logging.config.dictConfig(config)

    logger = logging.getLogger("dbbench.logging")
    logger.debug("Logging configured with level: %s", get_log_level())

    if os.getenv("DBBENCH_LOG_FILE"):
        logger.info("File logging enabled: %s", os.getenv("DBBENCH_LOG_FILE"))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the 'dbbench' hierarchy.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    if not name.startswith("dbbench"):
        if name == "__main__":
            name = "dbbench.main"
        else:
            name = f"dbbench.{name}"

    return logging.getLogger(name)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator to log the wall-clock duration of a coroutine.

    Args:
        logger: Logger instance to use
        operation: Description of the operation being timed
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                duration = time.perf_counter() - start_time
                logger.debug("Operation '%s' completed in %.3fs", operation, duration)
                return result
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error("Operation '%s' failed after %.3fs: %s", operation, duration, str(e))
                raise

        return wrapper

    return decorator
