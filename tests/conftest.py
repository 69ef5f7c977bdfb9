"""
Pytest configuration and shared fixtures for Kanon tests.
"""
import pytest

from kanon.linter import Linter


@pytest.fixture
def linter():
    """A linter with the builtin rules."""
    return Linter()
