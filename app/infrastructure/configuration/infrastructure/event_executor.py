"""Event worker pool infrastructure settings."""

from typing import Literal

from pydantic import Field, model_validator

from infrastructure.configuration.base import InfrastructureSettings


class EventExecutorSettings(InfrastructureSettings):
    """Sizing and lifecycle configuration for the asynchronous listener pool.

    The pool keeps ``core_pool_size`` threads alive, buffers up to
    ``queue_capacity`` pending tasks and grows up to ``max_pool_size``
    threads only once the queue is full. When both the queue and the
    thread budget are exhausted the ``saturation_policy`` decides what
    happens to the submission.

    Environment Variables:
        EVENT_EXECUTOR_CORE_POOL_SIZE: Threads kept alive when idle (default: 5)
        EVENT_EXECUTOR_MAX_POOL_SIZE: Hard cap on worker threads (default: 10)
        EVENT_EXECUTOR_QUEUE_CAPACITY: Bounded pending-task buffer (default: 25)
        EVENT_EXECUTOR_THREAD_NAME_PREFIX: Worker thread name prefix
        EVENT_EXECUTOR_KEEP_ALIVE_SECONDS: Idle time before extra threads exit
        EVENT_EXECUTOR_AWAIT_TERMINATION_SECONDS: Shutdown grace period (default: 60)
        EVENT_EXECUTOR_WAIT_FOR_TASKS_ON_SHUTDOWN: Drain queued tasks on shutdown
        EVENT_EXECUTOR_SATURATION_POLICY: 'caller_runs', 'reject' or 'block'

    Saturation Policies:
        - caller_runs: Run the listener on the publishing thread (default)
        - reject: Raise SaturationError to the publisher
        - block: Wait for queue space

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        pool_size = settings.event_executor.core_pool_size
        ```
    """

    core_pool_size: int = Field(
        default=5,
        alias="EVENT_EXECUTOR_CORE_POOL_SIZE",
        ge=0,
        description="Threads kept alive even when idle",
    )
    max_pool_size: int = Field(
        default=10,
        alias="EVENT_EXECUTOR_MAX_POOL_SIZE",
        ge=1,
        description="Maximum number of worker threads",
    )
    queue_capacity: int = Field(
        default=25,
        alias="EVENT_EXECUTOR_QUEUE_CAPACITY",
        ge=1,
        description="Maximum number of queued tasks waiting for a worker",
    )
    thread_name_prefix: str = Field(
        default="event-async-",
        alias="EVENT_EXECUTOR_THREAD_NAME_PREFIX",
        description="Prefix used to name worker threads",
    )
    keep_alive_seconds: float = Field(
        default=60.0,
        alias="EVENT_EXECUTOR_KEEP_ALIVE_SECONDS",
        gt=0,
        description="Idle time after which threads above the core size exit",
    )
    await_termination_seconds: float = Field(
        default=60.0,
        alias="EVENT_EXECUTOR_AWAIT_TERMINATION_SECONDS",
        ge=0,
        description="Grace period for queued and running tasks on shutdown",
    )
    wait_for_tasks_on_shutdown: bool = Field(
        default=True,
        alias="EVENT_EXECUTOR_WAIT_FOR_TASKS_ON_SHUTDOWN",
        description="Run queued tasks before shutting down instead of discarding them",
    )
    saturation_policy: Literal["caller_runs", "reject", "block"] = Field(
        default="caller_runs",
        alias="EVENT_EXECUTOR_SATURATION_POLICY",
        description="Behaviour when both the queue and the thread budget are full",
    )

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> "EventExecutorSettings":
        """Ensure the core size never exceeds the maximum size."""
        if self.core_pool_size > self.max_pool_size:
            raise ValueError(
                f"core_pool_size ({self.core_pool_size}) must not exceed "
                f"max_pool_size ({self.max_pool_size})"
            )
        return self
