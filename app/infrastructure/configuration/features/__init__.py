"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.observer import ObserverFeatureSettings

__all__ = [
    "ObserverFeatureSettings",
]
