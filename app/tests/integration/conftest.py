"""Fixtures wiring the real event system with the observer listeners."""

import pytest

from infrastructure.events import create_event_system
from modules.observer import (
    ALL_EVENT_TYPES,
    ActivityLog,
    OrderEventService,
    UserEventService,
    observer_registrar,
)


@pytest.fixture
def activity():
    return ActivityLog()


@pytest.fixture
def event_system(app_settings, activity):
    system = create_event_system(
        app_settings,
        registrars=[observer_registrar(activity, app_settings.observer)],
        trail_event_types=ALL_EVENT_TYPES,
    )
    yield system
    system.shutdown(timeout=5)


@pytest.fixture
def order_service(event_system):
    return OrderEventService(event_system.dispatcher)


@pytest.fixture
def user_service(event_system):
    return UserEventService(event_system.dispatcher)
