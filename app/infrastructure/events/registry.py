"""Listener registry for the infrastructure event system.

Maps event types to ordered lists of listener registrations. The registry is
populated by explicit wiring code at startup and frozen before the first
event is published; it is read-only afterwards and is never mutated while
events are being dispatched.

Usage:

    registry = ListenerRegistry()

    @registry.listener("order.created", order=1)
    def log_receipt(event: Event) -> None:
        ...

    registry.register("order.created", send_email, mode=ExecutionMode.ASYNC)
    registry.freeze()

    registry.resolve("order.created")  # [log_receipt, send_email]
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from infrastructure.events.exceptions import RegistryFrozenError
from infrastructure.events.models import Event, EventType, normalize_event_type
from infrastructure.logging import get_module_logger

logger = get_module_logger()

HIGHEST_PRECEDENCE = -(2**31)
LOWEST_PRECEDENCE = 2**31 - 1

Listener = Callable[[Event], Any]


class ExecutionMode(Enum):
    """Where a listener runs relative to the publisher."""

    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class ListenerRegistration:
    """One listener subscribed to one event type."""

    event_type: str
    callback: Listener = field(compare=False)
    mode: ExecutionMode = ExecutionMode.SYNC
    order: int = LOWEST_PRECEDENCE
    name: str = ""
    sequence: int = 0

    @property
    def is_async(self) -> bool:
        return self.mode is ExecutionMode.ASYNC

    def __call__(self, event: Event) -> Any:
        return self.callback(event)


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or getattr(
        callback, "__name__", repr(callback)
    )


class ListenerRegistry:
    """Process-wide mapping from event type to ordered listeners."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[ListenerRegistration]] = {}
        self._sequence = itertools.count()
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def register(
        self,
        event_type: EventType,
        callback: Listener,
        mode: ExecutionMode = ExecutionMode.SYNC,
        order: int = LOWEST_PRECEDENCE,
        name: Optional[str] = None,
    ) -> ListenerRegistration:
        """Register a listener for an event type.

        Args:
            event_type: The event type to listen to (e.g., 'order.created').
            callback: Callable receiving the event.
            mode: Run inline on the publisher's thread or on the worker pool.
            order: Rank among listeners of the same mode; lower runs first.
            name: Diagnostic name, defaults to the callback's qualified name.

        Returns:
            The created registration.

        Raises:
            RegistryFrozenError: If the registry has already been frozen.
            ValueError: If the event type is empty or the callback is not callable.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register listener for {event_type!r}: registry is frozen"
            )
        key = normalize_event_type(event_type)
        if not callable(callback):
            raise ValueError(f"Listener for {key!r} must be callable")

        registration = ListenerRegistration(
            event_type=key,
            callback=callback,
            mode=mode,
            order=order,
            name=name or _callback_name(callback),
            sequence=next(self._sequence),
        )
        self._listeners.setdefault(key, []).append(registration)
        logger.debug(
            "registered_event_listener",
            listener=registration.name,
            event_type=key,
            mode=mode.value,
            order=order,
            total_listeners=len(self._listeners[key]),
        )
        return registration

    def listener(
        self,
        event_type: EventType,
        mode: ExecutionMode = ExecutionMode.SYNC,
        order: int = LOWEST_PRECEDENCE,
        name: Optional[str] = None,
    ) -> Callable[[Listener], Listener]:
        """Decorator form of :meth:`register`.

        Returns:
            Decorator that registers the function and returns it unchanged.
        """

        def decorator(func: Listener) -> Listener:
            self.register(event_type, func, mode=mode, order=order, name=name)
            return func

        return decorator

    def resolve(self, event_type: EventType) -> List[ListenerRegistration]:
        """Get the listeners for an event type in execution order.

        Listeners are sorted by ``order``; registration order breaks ties.

        Returns:
            A new list, empty if nothing is registered for the type.
        """
        registrations = self._listeners.get(normalize_event_type(event_type), [])
        return sorted(registrations, key=lambda r: (r.order, r.sequence))

    def freeze(self) -> None:
        """Make the registry read-only. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.info("listener_registry_frozen", **self.summary())

    def get_registered_events(self) -> List[str]:
        """Get list of all event types with at least one listener."""
        return list(self._listeners.keys())

    def summary(self) -> Dict[str, Any]:
        """Listener names per event type, for logs and diagnostics."""
        return {
            "event_types": len(self._listeners),
            "listeners": {
                event_type: [
                    f"{r.name}[{r.mode.value}]" for r in self.resolve(event_type)
                ]
                for event_type in self._listeners
            },
        }

    def __len__(self) -> int:
        return sum(len(r) for r in self._listeners.values())
