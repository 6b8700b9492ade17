"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    EventDispatcherDep,
    WorkerPoolDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_event_dispatcher,
    get_worker_pool,
)

__all__ = [
    "SettingsDep",
    "EventDispatcherDep",
    "WorkerPoolDep",
    "get_settings",
    "get_event_dispatcher",
    "get_worker_pool",
]
