"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import logging

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def reset_ticketctl_logging():
    """Detach handlers added by setup_logging so tests don't leak open log files."""
    yield
    logger = logging.getLogger("ticketctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
