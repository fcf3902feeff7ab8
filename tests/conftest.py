import logging

import pytest

from schema_formats import new_default_registry


@pytest.fixture
def registry():
    """Fresh registry with the built-in formats for each test."""
    return new_default_registry()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
