"""
Factory functions for dependency injection.

Provides the application-scoped settings provider. Runtime services such as
the event system are built once by the server lifespan (the composition
root) and handed to consumers explicitly; see ``infrastructure.events.bootstrap``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Request

from infrastructure.configuration import Settings

if TYPE_CHECKING:
    from infrastructure.events import EventDispatcher, WorkerPool


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_event_dispatcher(request: Request) -> "EventDispatcher":
    """
    Get the event dispatcher built by the server lifespan.

    Returns:
        EventDispatcher: The dispatcher stored on ``app.state``.
    """
    return request.app.state.event_system.dispatcher


def get_worker_pool(request: Request) -> "WorkerPool":
    """
    Get the worker pool that runs asynchronous listeners.

    Returns:
        WorkerPool: The pool stored on ``app.state``.
    """
    return request.app.state.event_system.pool
