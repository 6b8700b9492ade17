"""Unit tests for event system wiring."""

import pytest

from infrastructure.configuration import Settings
from infrastructure.events.bootstrap import (
    EventSystem,
    create_event_system,
    register_infrastructure_handlers,
)
from infrastructure.events.exceptions import PoolShutdownError, RegistryFrozenError
from infrastructure.events.registry import HIGHEST_PRECEDENCE, ExecutionMode

pytestmark = pytest.mark.unit


@pytest.fixture
def event_system_factory():
    systems = []

    def _factory(*args, **kwargs):
        system = create_event_system(*args, **kwargs)
        systems.append(system)
        return system

    yield _factory

    for system in systems:
        system.shutdown(timeout=1)


class TestRegisterInfrastructureHandlers:
    """Test the event trail registration."""

    def test_trail_handler_runs_first(self, registry, mock_event_handler):
        registry.register("order.created", mock_event_handler, order=1)

        register_infrastructure_handlers(registry, ["order.created"])

        first = registry.resolve("order.created")[0]
        assert first.name == "event_trail"
        assert first.order == HIGHEST_PRECEDENCE
        assert first.mode is ExecutionMode.SYNC

    def test_one_trail_per_event_type(self, registry):
        register_infrastructure_handlers(registry, ["a", "b"])

        assert sorted(registry.get_registered_events()) == ["a", "b"]
        assert len(registry) == 2


class TestCreateEventSystem:
    """Test building the event system from settings."""

    def test_pool_is_sized_from_settings(
        self, event_system_factory, executor_settings_factory
    ):
        settings = Settings(
            event_executor=executor_settings_factory(
                EVENT_EXECUTOR_CORE_POOL_SIZE=3,
                EVENT_EXECUTOR_MAX_POOL_SIZE=5,
                EVENT_EXECUTOR_QUEUE_CAPACITY=8,
            )
        )

        system = event_system_factory(settings)

        assert isinstance(system, EventSystem)
        assert system.pool.core_pool_size == 3
        assert system.pool.max_pool_size == 5
        assert system.pool.queue_capacity == 8
        assert system.dispatcher.registry is system.registry
        assert system.dispatcher.pool is system.pool

    def test_registrars_receive_registry_and_dispatcher(
        self, event_system_factory, app_settings, mock_event_handler
    ):
        received = []

        def registrar(registry, dispatcher):
            received.append((registry, dispatcher))
            registry.register("order.created", mock_event_handler)

        system = event_system_factory(
            app_settings,
            registrars=[registrar],
            trail_event_types=["order.created"],
        )

        assert received == [(system.registry, system.dispatcher)]
        assert [r.name for r in system.registry.resolve("order.created")] == [
            "event_trail",
            "mock_event_handler",
        ]

    def test_registry_is_frozen_after_wiring(
        self, event_system_factory, app_settings, mock_event_handler
    ):
        system = event_system_factory(app_settings)

        assert system.registry.is_frozen
        with pytest.raises(RegistryFrozenError):
            system.registry.register("late.event", mock_event_handler)

    def test_shutdown_drains_pool(
        self, event_system_factory, app_settings, task_factory
    ):
        system = event_system_factory(app_settings)

        report = system.shutdown(timeout=1)

        assert report.discarded == 0
        assert system.pool.is_shutdown
        with pytest.raises(PoolShutdownError):
            system.pool.submit(task_factory(lambda event: None))
