"""Shared test fixtures for the lazy-pager test suite."""
import logging

import pytest

from lazy_pager.logging_utils import PACKAGE_LOGGER


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "tui: tests that drive the Textual app headlessly",
    )


@pytest.fixture
def anyio_backend():
    """Run ``@pytest.mark.anyio`` tests on asyncio only; the pager is asyncio-bound."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo ``configure_logging`` so caplog keeps seeing package records."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
