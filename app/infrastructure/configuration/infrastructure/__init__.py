"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.event_executor import (
    EventExecutorSettings,
)

__all__ = [
    "EventExecutorSettings",
]
