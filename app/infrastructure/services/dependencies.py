"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.events import EventDispatcher, WorkerPool
from infrastructure.services.providers import (
    get_settings,
    get_event_dispatcher,
    get_worker_pool,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Event dispatcher dependency - publish events from request handlers
EventDispatcherDep = Annotated[EventDispatcher, Depends(get_event_dispatcher)]

# Worker pool dependency - read-only diagnostics (stats, queue depth)
WorkerPoolDep = Annotated[WorkerPool, Depends(get_worker_pool)]

__all__ = [
    "SettingsDep",
    "EventDispatcherDep",
    "WorkerPoolDep",
]
