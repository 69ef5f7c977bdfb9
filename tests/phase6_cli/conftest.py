"""
Fixtures for CLI tests.
"""
import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    """The CLI points loguru at CliRunner's stderr; restore the real one afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
