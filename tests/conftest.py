"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.block_handlers import create_default_registry
from src.conversion.engine import BlockConverter

# Per-block dispatch decisions are logged at DEBUG; keep test output to
# warnings (malformed blocks, handler failures) and above.
logging.getLogger("src").setLevel(logging.INFO)


@pytest.fixture
def registry():
    """Fresh registry with the built-in handlers.

    A new registry per test keeps handler registrations from leaking
    between tests.
    """
    return create_default_registry()


@pytest.fixture
def converter(registry):
    """BlockConverter using the per-test registry."""
    return BlockConverter(registry=registry)
