"""Fixtures for observer module tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.events import EventDispatcher
from modules.observer.activity import ActivityLog


@pytest.fixture
def activity():
    return ActivityLog()


@pytest.fixture
def mock_sleep():
    """Replacement for time.sleep that records requested delays."""
    return MagicMock()


@pytest.fixture
def mock_dispatcher():
    return MagicMock(spec=EventDispatcher)
