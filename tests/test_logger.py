"""
Tests for logging setup.
"""

import logging
import sys

import pytest
from loguru import logger

import splitledger  # noqa: F401
from splitledger.core.logger import InterceptHandler, setup_logging


def _intercepting(root):
    return [h for h in root.handlers if isinstance(h, InterceptHandler)]


@pytest.fixture
def restore_logging():
    """Put root handlers and loguru sinks back after a test configures logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    logger.remove()
    logger.add(sys.stderr)
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test logging is configured only on request."""

    def test_import_leaves_root_logging_alone(self):
        assert _intercepting(logging.getLogger()) == []

    def test_setup_routes_stdlib_logging(self, restore_logging):
        setup_logging(log_level="WARNING")
        assert len(_intercepting(logging.getLogger())) == 1

    def test_intercepted_records_reach_loguru(self, restore_logging):
        setup_logging(log_level="WARNING")
        collected = []
        logger.add(lambda message: collected.append(message.record["message"]), level="WARNING")

        logging.getLogger("host.app").warning("disk almost full")

        assert "disk almost full" in collected
