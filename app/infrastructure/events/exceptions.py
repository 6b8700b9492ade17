"""Exceptions raised by the infrastructure event system."""


class EventSystemError(Exception):
    """Base class for event system errors."""


class RegistryFrozenError(EventSystemError):
    """Raised when a listener is registered after startup wiring completed."""


class TaskRejectedError(EventSystemError):
    """Raised when the worker pool refuses a task."""

    def __init__(self, message: str, task=None):
        super().__init__(message)
        self.task = task


class SaturationError(TaskRejectedError):
    """Raised under the reject policy when both queue and threads are exhausted."""


class PoolShutdownError(TaskRejectedError):
    """Raised when a task is submitted after shutdown has begun."""
