"""Bounded worker pool for asynchronous event listeners.

The pool follows the classic core/max/queue executor model:

1. While fewer than ``core_pool_size`` threads exist, every submission starts
   a new worker that runs the task first.
2. Otherwise the task is offered to a bounded queue; idle workers pick it up.
3. When the queue is full, extra workers are started up to ``max_pool_size``.
4. When threads and queue are both exhausted the saturation policy decides:
   run on the caller's thread, raise ``SaturationError``, or block until the
   queue has room. A task is never dropped silently.

Every task runs inside a wrapper that catches listener exceptions, hands them
to the uncaught-exception handler and keeps the worker thread alive.

Usage:

    pool = WorkerPool(core_pool_size=2, max_pool_size=4, queue_capacity=10)
    pool.submit(Task(listener=registration, event=event))
    report = pool.shutdown(timeout=5)
"""

import itertools
import queue
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Set

from infrastructure.events.exceptions import PoolShutdownError, SaturationError
from infrastructure.events.models import Event
from infrastructure.events.registry import ListenerRegistration
from infrastructure.logging import bind_request_context, get_module_logger

if TYPE_CHECKING:
    from infrastructure.configuration import EventExecutorSettings

logger = get_module_logger()

# How often idle workers and blocked submitters re-check pool state
_POLL_INTERVAL_SECONDS = 0.05


class SaturationPolicy(Enum):
    """Behaviour when both the queue and the thread budget are exhausted."""

    CALLER_RUNS = "caller_runs"
    REJECT = "reject"
    BLOCK = "block"


@dataclass(frozen=True)
class Task:
    """A single pending invocation of one listener against one event."""

    listener: ListenerRegistration
    event: Event

    def run(self) -> Any:
        with bind_request_context(
            correlation_id=str(self.event.correlation_id),
            event_type=self.event.event_type,
            listener=self.listener.name,
        ):
            return self.listener(self.event)

    def describe(self) -> Dict[str, str]:
        return {
            "listener": self.listener.name,
            "event_type": self.event.event_type,
            "correlation_id": str(self.event.correlation_id),
        }


@dataclass(frozen=True)
class DrainReport:
    """Outcome of a pool shutdown.

    Attributes:
        completed: Tasks that finished successfully during the grace period.
        failed: Tasks that raised during the grace period.
        discarded: Queued tasks dropped without running.
        still_running: Tasks still executing when shutdown returned.
    """

    completed: int = 0
    failed: int = 0
    discarded: int = 0
    still_running: int = 0

    @property
    def finished(self) -> int:
        return self.completed + self.failed


UncaughtExceptionHandler = Callable[[BaseException, Task], None]


def log_uncaught_exception(exc: BaseException, task: Task) -> None:
    """Default uncaught-exception handler: log and move on."""
    logger.error(
        "async_listener_failed",
        thread=threading.current_thread().name,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
        **task.describe(),
    )


class WorkerPool:
    """Bounded thread pool executing asynchronous listener tasks."""

    def __init__(
        self,
        core_pool_size: int = 5,
        max_pool_size: int = 10,
        queue_capacity: int = 25,
        thread_name_prefix: str = "event-async-",
        keep_alive_seconds: float = 60.0,
        await_termination_seconds: float = 60.0,
        wait_for_tasks_on_shutdown: bool = True,
        saturation_policy: SaturationPolicy = SaturationPolicy.CALLER_RUNS,
        uncaught_exception_handler: Optional[UncaughtExceptionHandler] = None,
    ):
        if max_pool_size < 1:
            raise ValueError("max_pool_size must be at least 1")
        if core_pool_size < 0 or core_pool_size > max_pool_size:
            raise ValueError("core_pool_size must be between 0 and max_pool_size")
        if queue_capacity < 1:
            raise ValueError("queue_capacity must be at least 1")

        self._core_pool_size = core_pool_size
        self._max_pool_size = max_pool_size
        self._queue_capacity = queue_capacity
        self._thread_name_prefix = thread_name_prefix
        self._keep_alive_seconds = keep_alive_seconds
        self._await_termination_seconds = await_termination_seconds
        self._wait_for_tasks_on_shutdown = wait_for_tasks_on_shutdown
        self._saturation_policy = SaturationPolicy(saturation_policy)
        self._uncaught_exception_handler = (
            uncaught_exception_handler or log_uncaught_exception
        )

        self._queue: "queue.Queue[Task]" = queue.Queue(maxsize=queue_capacity)
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._shutdown_lock = threading.Lock()
        self._workers: Set[threading.Thread] = set()
        self._thread_counter = itertools.count(1)
        self._shutdown = False
        self._report: Optional[DrainReport] = None

        # Accepted but not yet finished (queued, running, or running on a caller)
        self._pending = 0
        self._active = 0
        self._largest_pool_size = 0
        self._completed = 0
        self._failed = 0
        self._rejected = 0
        self._caller_runs = 0
        self._discarded = 0

    @classmethod
    def from_settings(
        cls,
        settings: "EventExecutorSettings",
        uncaught_exception_handler: Optional[UncaughtExceptionHandler] = None,
    ) -> "WorkerPool":
        """Build a pool from the event executor settings section."""
        return cls(
            core_pool_size=settings.core_pool_size,
            max_pool_size=settings.max_pool_size,
            queue_capacity=settings.queue_capacity,
            thread_name_prefix=settings.thread_name_prefix,
            keep_alive_seconds=settings.keep_alive_seconds,
            await_termination_seconds=settings.await_termination_seconds,
            wait_for_tasks_on_shutdown=settings.wait_for_tasks_on_shutdown,
            saturation_policy=SaturationPolicy(settings.saturation_policy),
            uncaught_exception_handler=uncaught_exception_handler,
        )

    @property
    def core_pool_size(self) -> int:
        return self._core_pool_size

    @property
    def max_pool_size(self) -> int:
        return self._max_pool_size

    @property
    def queue_capacity(self) -> int:
        return self._queue_capacity

    @property
    def saturation_policy(self) -> SaturationPolicy:
        return self._saturation_policy

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    @property
    def pool_size(self) -> int:
        with self._lock:
            return len(self._workers)

    @property
    def active_count(self) -> int:
        with self._lock:
            return self._active

    @property
    def queue_size(self) -> int:
        return self._queue.qsize()

    def submit(self, task: Task) -> None:
        """Submit a task for asynchronous execution.

        Args:
            task: The listener invocation to run.

        Raises:
            PoolShutdownError: If shutdown has begun.
            SaturationError: Under the reject policy when the pool is saturated.
        """
        with self._lock:
            self._ensure_running(task)

            if len(self._workers) < self._core_pool_size:
                self._start_worker(task)
                return

            try:
                self._queue.put_nowait(task)
            except queue.Full:
                pass
            else:
                self._pending += 1
                if not self._workers:
                    self._start_worker(None)
                return

            if len(self._workers) < self._max_pool_size:
                self._start_worker(task)
                return

        self._apply_saturation_policy(task)

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no task is queued or running.

        Returns:
            True if the pool became idle, False on timeout.
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout)

    def shutdown(self, timeout: Optional[float] = None) -> DrainReport:
        """Stop accepting tasks and drain the pool.

        Waits up to ``timeout`` seconds (default: ``await_termination_seconds``)
        for queued and running tasks. Tasks still queued afterwards are
        discarded; running tasks are left to finish on their own.

        Calling shutdown again returns the first report.

        Args:
            timeout: Grace period in seconds.

        Returns:
            DrainReport describing what happened to in-flight work.
        """
        with self._shutdown_lock:
            if self._report is not None:
                return self._report

            with self._lock:
                self._shutdown = True
                completed_before = self._completed
                failed_before = self._failed
                workers = list(self._workers)
                queued = self._queue.qsize()
                running = self._active

            grace = self._await_termination_seconds if timeout is None else timeout
            logger.info(
                "worker_pool_shutdown_started",
                queued=queued,
                running=running,
                timeout=grace,
                wait_for_tasks=self._wait_for_tasks_on_shutdown,
            )

            discarded = 0
            if not self._wait_for_tasks_on_shutdown:
                discarded += self._drain_queue()

            deadline = time.monotonic() + grace
            with self._idle:
                drained = self._idle.wait_for(lambda: self._pending == 0, grace)

            if drained:
                for worker in workers:
                    worker.join(max(0.0, deadline - time.monotonic()))
            else:
                discarded += self._drain_queue()

            with self._lock:
                report = DrainReport(
                    completed=self._completed - completed_before,
                    failed=self._failed - failed_before,
                    discarded=discarded,
                    still_running=self._active,
                )
            self._report = report

            log = logger.warning if (discarded or report.still_running) else logger.info
            log(
                "worker_pool_shutdown",
                completed=report.completed,
                failed=report.failed,
                discarded=report.discarded,
                still_running=report.still_running,
            )
            return report

    def stats(self) -> Dict[str, Any]:
        """Point-in-time counters for diagnostics."""
        with self._lock:
            return {
                "core_pool_size": self._core_pool_size,
                "max_pool_size": self._max_pool_size,
                "queue_capacity": self._queue_capacity,
                "saturation_policy": self._saturation_policy.value,
                "pool_size": len(self._workers),
                "largest_pool_size": self._largest_pool_size,
                "active_count": self._active,
                "queue_size": self._queue.qsize(),
                "completed": self._completed,
                "failed": self._failed,
                "rejected": self._rejected,
                "caller_runs": self._caller_runs,
                "discarded": self._discarded,
                "shutdown": self._shutdown,
            }

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def _ensure_running(self, task: Task) -> None:
        # Caller holds self._lock
        if self._shutdown:
            self._rejected += 1
            logger.warning("task_rejected", reason="pool_shutdown", **task.describe())
            raise PoolShutdownError(
                f"Worker pool is shut down; cannot run {task.listener.name}", task
            )

    def _start_worker(self, first_task: Optional[Task]) -> None:
        # Caller holds self._lock
        if first_task is not None:
            self._pending += 1
        thread = threading.Thread(
            target=self._worker_loop,
            args=(first_task,),
            name=f"{self._thread_name_prefix}{next(self._thread_counter)}",
            daemon=True,
        )
        self._workers.add(thread)
        self._largest_pool_size = max(self._largest_pool_size, len(self._workers))
        thread.start()

    def _apply_saturation_policy(self, task: Task) -> None:
        policy = self._saturation_policy
        logger.warning(
            "worker_pool_saturated",
            policy=policy.value,
            max_pool_size=self._max_pool_size,
            queue_capacity=self._queue_capacity,
            **task.describe(),
        )

        if policy is SaturationPolicy.CALLER_RUNS:
            with self._lock:
                self._ensure_running(task)
                self._caller_runs += 1
                self._pending += 1
            self._execute(task)
            return

        if policy is SaturationPolicy.REJECT:
            with self._lock:
                self._rejected += 1
            raise SaturationError(
                f"Worker pool saturated ({self._max_pool_size} threads, "
                f"{self._queue_capacity} queued); rejected {task.listener.name}",
                task,
            )

        # BLOCK: wait for queue space, giving up if the pool shuts down
        while True:
            with self._lock:
                self._ensure_running(task)
                try:
                    self._queue.put_nowait(task)
                except queue.Full:
                    pass
                else:
                    self._pending += 1
                    return
            time.sleep(_POLL_INTERVAL_SECONDS)

    def _execute(self, task: Task) -> None:
        with self._lock:
            self._active += 1
        failed = True
        try:
            task.run()
            failed = False
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            # SystemExit and friends from a listener must not end the worker
            self._handle_uncaught(exc, task)
        finally:
            with self._lock:
                self._active -= 1
                self._pending -= 1
                if failed:
                    self._failed += 1
                else:
                    self._completed += 1
                if self._pending == 0:
                    self._idle.notify_all()

    def _handle_uncaught(self, exc: BaseException, task: Task) -> None:
        try:
            self._uncaught_exception_handler(exc, task)
        except Exception as handler_error:
            logger.exception(
                "uncaught_exception_handler_failed",
                error=str(handler_error),
                original_error=str(exc),
                **task.describe(),
            )

    def _worker_loop(self, first_task: Optional[Task]) -> None:
        task = first_task
        try:
            if task is None:
                task = self._next_task()
            while task is not None:
                self._execute(task)
                task = self._next_task()
        finally:
            with self._lock:
                self._workers.discard(threading.current_thread())

    def _next_task(self) -> Optional[Task]:
        idle_since = time.monotonic()
        while True:
            try:
                return self._queue.get(timeout=_POLL_INTERVAL_SECONDS)
            except queue.Empty:
                pass

            with self._lock:
                # Submissions enqueue under the lock, so an empty queue here
                # cannot hide a task that was just accepted.
                if not self._queue.empty():
                    continue
                if self._shutdown:
                    self._workers.discard(threading.current_thread())
                    return None
                idle_for = time.monotonic() - idle_since
                if (
                    len(self._workers) > self._core_pool_size
                    and idle_for >= self._keep_alive_seconds
                ):
                    self._workers.discard(threading.current_thread())
                    logger.debug(
                        "worker_retired",
                        thread=threading.current_thread().name,
                        pool_size=len(self._workers),
                    )
                    return None

    def _drain_queue(self) -> int:
        discarded = 0
        while True:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                break
            discarded += 1
            logger.warning("task_discarded", reason="pool_shutdown", **task.describe())

        with self._lock:
            self._pending -= discarded
            self._discarded += discarded
            if self._pending == 0:
                self._idle.notify_all()
        return discarded
