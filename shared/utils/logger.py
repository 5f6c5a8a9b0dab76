"""
Logging configuration for the validation toolkit.

Every module calls setup_logger(__name__); handlers are attached once per
logger name, with the level and optional log file taken from settings.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(level: str, log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger with the toolkit's handlers and format.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(settings.LOG_LEVEL)
        for handler in _build_handlers(settings.LOG_LEVEL, settings.LOG_FILE):
            logger.addHandler(handler)

    return logger


def log_validation_failure(
    logger: logging.Logger,
    validator_name: str,
    message: Optional[str],
    errors: Mapping[str, Any]
) -> None:
    """
    Log a rejected value at DEBUG level.

    Args:
        logger: Logger instance
        validator_name: Name of the validator that rejected the value
        message: Failure message
        errors: Result errors (constraint and category are included in the line)
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    constraint = errors.get("constraint") or "failed"
    category = errors.get("category")
    tag = f"{constraint}/{category}" if category else constraint
    logger.debug(f"Validator '{validator_name}' rejected value [{tag}]: {message}")


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """
    Log an error with context.

    Args:
        logger: Logger instance
        error: Exception that occurred
        context: Where the error occurred (file, validator, definition...)
    """
    prefix = f"{context}: " if context else ""
    logger.error(f"{prefix}{type(error).__name__}: {error}")

    if settings.DEBUG:
        logger.exception("Full traceback:")
