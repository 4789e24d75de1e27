"""
PLANETSEARCH Unit Tests - Logging Configuration

Unit tests for planetsearch/logging_config.py.
Tests setup_logging, get_logger and set_service_level.

Run:
    pytest tests/unit/test_logging_config.py -v
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from planetsearch.logging_config import (
    ROOT_LOGGER_NAME,
    get_logger,
    set_service_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Leave the planetsearch logger as the test found it."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = root_logger.level
    handlers = list(root_logger.handlers)
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


# =============================================================================
# Test setup_logging Function
# =============================================================================

class TestSetupLogging:
    """Unit tests for setup_logging function."""

    def test_setup_logging_default(self):
        """Test setup_logging with default parameters."""
        setup_logging()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1

    def test_setup_logging_custom_level(self):
        """Test setup_logging with custom log level."""
        setup_logging(log_level="DEBUG")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG

    def test_setup_logging_lowercase_level(self):
        setup_logging(log_level="warning")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING

    def test_setup_logging_unknown_level_defaults_to_info(self):
        setup_logging(log_level="LOUD")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO

    def test_setup_logging_with_file(self, tmp_path):
        """Test setup_logging adds a rotating file handler."""
        log_path = tmp_path / "planetsearch.log"
        setup_logging(log_file=log_path)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(root_logger.handlers) == 2
        assert len(file_handlers) == 1

        get_logger("test_file").info("catalog ready")
        file_handlers[0].flush()
        assert "catalog ready" in log_path.read_text(encoding="utf-8")

    def test_setup_logging_creates_parent_directory(self, tmp_path):
        """Test setup_logging creates missing log directories."""
        log_path = tmp_path / "nested" / "logs" / "planetsearch.log"
        setup_logging(log_file=str(log_path))
        assert log_path.parent.exists()

    def test_setup_logging_clears_existing_handlers(self, tmp_path):
        """Test calling setup_logging twice does not stack handlers."""
        setup_logging(log_file=tmp_path / "first.log")
        setup_logging()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert len(root_logger.handlers) == 1  # Only console handler


# =============================================================================
# Test get_logger Function
# =============================================================================

class TestGetLogger:
    """Unit tests for get_logger function."""

    def test_get_logger_returns_logger(self):
        assert isinstance(get_logger("anything"), logging.Logger)

    def test_get_logger_adds_prefix(self):
        """Test module names are placed under the planetsearch namespace."""
        logger = get_logger("services.features.loader")
        assert logger.name == "planetsearch.services.features.loader"

    def test_get_logger_preserves_existing_prefix(self):
        logger = get_logger("planetsearch.main")
        assert logger.name == "planetsearch.main"


# =============================================================================
# Test set_service_level Function
# =============================================================================

class TestSetServiceLevel:
    """Unit tests for set_service_level function."""

    def test_set_service_level_debug(self):
        set_service_level("features", "DEBUG")
        service_logger = logging.getLogger("planetsearch.services.features")
        assert service_logger.level == logging.DEBUG
        service_logger.setLevel(logging.NOTSET)

    def test_set_service_level_case_insensitive(self):
        set_service_level("api", "warning")
        service_logger = logging.getLogger("planetsearch.services.api")
        assert service_logger.level == logging.WARNING
        service_logger.setLevel(logging.NOTSET)

    def test_set_service_level_invalid_defaults_to_info(self):
        set_service_level("api", "INVALID")
        service_logger = logging.getLogger("planetsearch.services.api")
        assert service_logger.level == logging.INFO
        service_logger.setLevel(logging.NOTSET)

    def test_service_level_applies_to_modules(self):
        """Test a service level governs the loggers of its modules."""
        set_service_level("features", "ERROR")
        module_logger = get_logger("services.features.catalog")
        assert module_logger.getEffectiveLevel() == logging.ERROR
        logging.getLogger("planetsearch.services.features").setLevel(logging.NOTSET)
