"""Shared fixtures for the observer showcase test suite."""

import pytest

from api.dependencies.rate_limits import get_limiter
from infrastructure.configuration import (
    EventExecutorSettings,
    ObserverFeatureSettings,
    Settings,
)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate limit counters."""
    limiter = get_limiter()
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def executor_settings_factory():
    """Factory for worker pool settings, built from environment aliases."""

    def _factory(**overrides):
        values = {
            "EVENT_EXECUTOR_CORE_POOL_SIZE": 2,
            "EVENT_EXECUTOR_MAX_POOL_SIZE": 4,
            "EVENT_EXECUTOR_QUEUE_CAPACITY": 10,
            "EVENT_EXECUTOR_KEEP_ALIVE_SECONDS": 1,
            "EVENT_EXECUTOR_AWAIT_TERMINATION_SECONDS": 5,
        }
        values.update(overrides)
        return EventExecutorSettings(**values)

    return _factory


@pytest.fixture
def fast_observer_settings():
    """Observer settings with the simulated latencies shrunk."""
    return ObserverFeatureSettings(
        OBSERVER_EMAIL_DELAY_SECONDS=0.01,
        OBSERVER_WAREHOUSE_DELAY_SECONDS=0.01,
        OBSERVER_PROFILE_DELAY_SECONDS=0.01,
        OBSERVER_EXTERNAL_SYSTEM_DELAY_SECONDS=0.01,
        OBSERVER_PREFERENCES_DELAY_SECONDS=0.01,
    )


@pytest.fixture
def app_settings(executor_settings_factory, fast_observer_settings):
    """Application settings wired with fast observer delays."""
    return Settings(
        event_executor=executor_settings_factory(),
        observer=fast_observer_settings,
    )
