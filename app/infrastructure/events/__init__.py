"""Infrastructure event system - in-process event dispatcher.

Synchronous listeners run inline on the publishing thread; asynchronous
listeners run on a bounded worker pool. Listeners may publish follow-on
events through the dispatcher they were wired with.

Usage:

    from infrastructure.events import (
        Event,
        EventDispatcher,
        ExecutionMode,
        ListenerRegistry,
        WorkerPool,
    )

    registry = ListenerRegistry()
    pool = WorkerPool(core_pool_size=2, max_pool_size=4, queue_capacity=10)
    dispatcher = EventDispatcher(registry, pool)

    @registry.listener("order.created", order=1)
    def log_receipt(event: Event) -> None:
        ...

    @registry.listener("order.created", mode=ExecutionMode.ASYNC)
    def send_email(event: Event) -> None:
        ...

    registry.freeze()
    dispatcher.publish(Event(event_type="order.created", payload={"order_id": 42}))
    pool.shutdown(timeout=5)
"""

from infrastructure.events.bootstrap import (
    EventSystem,
    create_event_system,
    register_infrastructure_handlers,
)
from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.exceptions import (
    EventSystemError,
    PoolShutdownError,
    RegistryFrozenError,
    SaturationError,
    TaskRejectedError,
)
from infrastructure.events.models import Event, normalize_event_type
from infrastructure.events.pool import (
    DrainReport,
    SaturationPolicy,
    Task,
    WorkerPool,
    log_uncaught_exception,
)
from infrastructure.events.registry import (
    HIGHEST_PRECEDENCE,
    LOWEST_PRECEDENCE,
    ExecutionMode,
    ListenerRegistration,
    ListenerRegistry,
)

__all__ = [
    "Event",
    "normalize_event_type",
    "EventDispatcher",
    "ExecutionMode",
    "ListenerRegistration",
    "ListenerRegistry",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "WorkerPool",
    "Task",
    "DrainReport",
    "SaturationPolicy",
    "log_uncaught_exception",
    "EventSystem",
    "create_event_system",
    "register_infrastructure_handlers",
    "EventSystemError",
    "RegistryFrozenError",
    "TaskRejectedError",
    "SaturationError",
    "PoolShutdownError",
]
