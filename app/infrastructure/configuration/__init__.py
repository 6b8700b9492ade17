"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
application using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    EventExecutorSettings: Event worker pool settings class
    ObserverFeatureSettings: Observer showcase feature settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    max_threads = settings.event_executor.max_pool_size
    policy = settings.event_executor.saturation_policy

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.event_executor import (
    EventExecutorSettings,
)
from infrastructure.configuration.features.observer import ObserverFeatureSettings

__all__ = ["Settings", "EventExecutorSettings", "ObserverFeatureSettings"]
