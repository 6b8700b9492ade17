"""Event dispatcher for infrastructure event system.

Resolves the listeners registered for a published event and runs them
according to their execution mode:

- Synchronous listeners run inline on the publishing thread, in rank order.
  The first failure propagates to the publisher and stops the dispatch; no
  later synchronous or asynchronous listener for that event runs.
- Once every synchronous listener has returned, each asynchronous listener
  is submitted to the worker pool in rank order and ``publish`` returns
  without waiting for them.

Listeners may publish follow-on events through the same dispatcher. A
publish made from a worker thread runs its synchronous listeners on that
worker thread and queues its asynchronous listeners on the same pool.
"""

from typing import Iterable, List, Tuple

from infrastructure.events.exceptions import TaskRejectedError
from infrastructure.events.models import Event
from infrastructure.events.pool import Task, WorkerPool
from infrastructure.events.registry import ListenerRegistration, ListenerRegistry
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class EventDispatcher:
    """Publishes events to the listeners held by a registry.

    Usage:
        dispatcher = EventDispatcher(registry, pool)
        dispatcher.publish(Event(event_type="order.created", payload={"order_id": 42}))
    """

    def __init__(self, registry: ListenerRegistry, pool: WorkerPool):
        self._registry = registry
        self._pool = pool

    @property
    def registry(self) -> ListenerRegistry:
        return self._registry

    @property
    def pool(self) -> WorkerPool:
        return self._pool

    def publish(self, event: Event) -> None:
        """Dispatch an event to its listeners.

        Args:
            event: The event to dispatch.

        Raises:
            Exception: Whatever a synchronous listener raised.
            TaskRejectedError: If the pool refuses an asynchronous listener.
        """
        sync_listeners, async_listeners = self._partition(
            self._registry.resolve(event.event_type)
        )

        logger.info(
            "dispatching_event",
            event_type=event.event_type,
            sync_listeners=len(sync_listeners),
            async_listeners=len(async_listeners),
            correlation_id=str(event.correlation_id),
        )

        for registration in sync_listeners:
            try:
                registration(event)
            except Exception as e:
                logger.error(
                    "sync_listener_failed",
                    listener=registration.name,
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                    skipped_listeners=self._remaining(
                        registration, sync_listeners, async_listeners
                    ),
                )
                raise

        for index, registration in enumerate(async_listeners):
            try:
                self._pool.submit(Task(listener=registration, event=event))
            except TaskRejectedError as e:
                logger.error(
                    "async_listener_submission_failed",
                    listener=registration.name,
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                    skipped_listeners=[r.name for r in async_listeners[index + 1 :]],
                )
                raise

    def publish_all(self, events: Iterable[Event]) -> None:
        """Publish several events in order."""
        for event in events:
            self.publish(event)

    @staticmethod
    def _partition(
        registrations: List[ListenerRegistration],
    ) -> Tuple[List[ListenerRegistration], List[ListenerRegistration]]:
        sync_listeners = [r for r in registrations if not r.is_async]
        async_listeners = [r for r in registrations if r.is_async]
        return sync_listeners, async_listeners

    @staticmethod
    def _remaining(
        failed: ListenerRegistration,
        sync_listeners: List[ListenerRegistration],
        async_listeners: List[ListenerRegistration],
    ) -> List[str]:
        index = sync_listeners.index(failed)
        return [r.name for r in sync_listeners[index + 1 :] + async_listeners]
