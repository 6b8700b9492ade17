"""Observer showcase: order and user lifecycle events.

Publisher services turn API calls into events; listeners react to them
synchronously on the caller's thread or asynchronously on the worker pool.
"""

from modules.observer.activity import ActivityEntry, ActivityLog
from modules.observer.events import ALL_EVENT_TYPES, ObserverEventType
from modules.observer.listeners import (
    OrderEventListener,
    UserRegistrationListener,
    observer_registrar,
)
from modules.observer.service import (
    OrderEventService,
    ServiceValidationError,
    UserEventService,
)

__all__ = [
    "ActivityEntry",
    "ActivityLog",
    "ALL_EVENT_TYPES",
    "ObserverEventType",
    "OrderEventListener",
    "UserRegistrationListener",
    "observer_registrar",
    "OrderEventService",
    "ServiceValidationError",
    "UserEventService",
]
