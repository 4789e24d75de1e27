"""
PLANETSEARCH Logging Configuration

Centralized logging configuration for the feature search service:
- Console output with a uniform format
- Optional rotating file handler with size limits
- Per-service log level configuration

Usage:
    from planetsearch.logging_config import setup_logging, get_logger

    # Initialize logging at application startup
    setup_logging(log_level="INFO", log_file="planetsearch.log")

    # Get a logger for your module
    logger = get_logger(__name__)
    logger.info("Catalog built", extra={"bodies": 3})
"""

import logging
import sys
from pathlib import Path
from typing import Optional

# Module-level constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

ROOT_LOGGER_NAME = "planetsearch"

# Log level mapping for per-service configuration
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
) -> None:
    """Configure logging for the PLANETSEARCH application.

    Sets up the ``planetsearch`` logger with a console handler and an
    optional rotating file handler. Calling it again replaces the handlers
    rather than stacking new ones.

    Args:
        log_level: Default logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, enables file logging
                  with rotation.

    Example:
        setup_logging(log_level="DEBUG", log_file="/var/log/planetsearch.log")
    """
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module or service.

    Returns a child logger under the planetsearch namespace so it inherits
    the handlers installed by setup_logging.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Loading mars.csv")
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_service_level(service_name: str, level: str) -> None:
    """Set log level for a specific service.

    Args:
        service_name: Name of the service (e.g., "features", "api")
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Example:
        set_service_level("features", "DEBUG")  # Verbose ingestion logging
    """
    logger_name = f"{ROOT_LOGGER_NAME}.services.{service_name}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))
