"""Build and wire the event system at startup.

The event system (registry, worker pool, dispatcher) is created once by the
application's composition root and passed explicitly to whatever needs it.
Feature modules contribute listeners through registrar callables that
receive the registry and the dispatcher; the registry is frozen once every
registrar has run.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from infrastructure.configuration import Settings
from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.handlers import LoggingHandler
from infrastructure.events.models import EventType
from infrastructure.events.pool import DrainReport, UncaughtExceptionHandler, WorkerPool
from infrastructure.events.registry import HIGHEST_PRECEDENCE, ListenerRegistry
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ListenerRegistrar = Callable[[ListenerRegistry, EventDispatcher], None]


@dataclass
class EventSystem:
    """The wired registry, worker pool and dispatcher."""

    registry: ListenerRegistry
    pool: WorkerPool
    dispatcher: EventDispatcher

    def shutdown(self, timeout: Optional[float] = None) -> DrainReport:
        """Drain the worker pool."""
        return self.pool.shutdown(timeout)


def register_infrastructure_handlers(
    registry: ListenerRegistry, event_types: Iterable[EventType]
) -> None:
    """Register system-level handlers for the given event types.

    The event trail handler runs synchronously ahead of every feature
    listener.
    """
    trail = LoggingHandler()
    registered = []
    for event_type in event_types:
        registration = registry.register(
            event_type,
            trail.handle,
            order=HIGHEST_PRECEDENCE,
            name="event_trail",
        )
        registered.append(registration.event_type)
    logger.info("infrastructure_handlers_registered", event_types=registered)


def create_event_system(
    settings: Settings,
    registrars: Iterable[ListenerRegistrar] = (),
    trail_event_types: Iterable[EventType] = (),
    uncaught_exception_handler: Optional[UncaughtExceptionHandler] = None,
) -> EventSystem:
    """Create the event system and run listener registration.

    Args:
        settings: Application settings; the pool is sized from
            ``settings.event_executor``.
        registrars: Callables registering feature listeners.
        trail_event_types: Event types that get the event trail handler.
        uncaught_exception_handler: Optional override for async failures.

    Returns:
        EventSystem with a frozen registry.
    """
    pool = WorkerPool.from_settings(
        settings.event_executor,
        uncaught_exception_handler=uncaught_exception_handler,
    )
    registry = ListenerRegistry()
    dispatcher = EventDispatcher(registry, pool)

    register_infrastructure_handlers(registry, trail_event_types)
    for registrar in registrars:
        registrar(registry, dispatcher)
    registry.freeze()

    logger.info(
        "event_system_created",
        core_pool_size=pool.core_pool_size,
        max_pool_size=pool.max_pool_size,
        queue_capacity=pool.queue_capacity,
        saturation_policy=pool.saturation_policy.value,
        listeners=len(registry),
    )
    return EventSystem(registry=registry, pool=pool, dispatcher=dispatcher)
