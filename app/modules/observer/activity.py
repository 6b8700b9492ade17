"""Thread-safe record of what the observer listeners did.

Listeners never write back onto the shared event; they append to this log
instead. The log is owned by the listeners and guarded by its own
condition so that sync listeners on the publisher's thread and async
listeners on worker threads can record concurrently.
"""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from infrastructure.events import Event


@dataclass(frozen=True)
class ActivityEntry:
    """One completed listener step."""

    step: str
    event_type: str
    correlation_id: str
    thread_name: str
    details: Dict[str, Any] = field(default_factory=dict)
    recorded_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "event_type": self.event_type,
            "correlation_id": self.correlation_id,
            "thread_name": self.thread_name,
            "details": dict(self.details),
            "recorded_at": self.recorded_at.isoformat(),
        }


class ActivityLog:
    """Append-only, bounded activity log."""

    def __init__(self, max_entries: int = 1000):
        self._entries: List[ActivityEntry] = []
        self._max_entries = max_entries
        self._condition = threading.Condition()

    def record(self, step: str, event: Event, **details: Any) -> ActivityEntry:
        entry = ActivityEntry(
            step=step,
            event_type=event.event_type,
            correlation_id=str(event.correlation_id),
            thread_name=threading.current_thread().name,
            details=details,
        )
        with self._condition:
            self._entries.append(entry)
            if len(self._entries) > self._max_entries:
                del self._entries[: len(self._entries) - self._max_entries]
            self._condition.notify_all()
        return entry

    def entries(self, step: Optional[str] = None) -> List[ActivityEntry]:
        with self._condition:
            if step is None:
                return list(self._entries)
            return [e for e in self._entries if e.step == step]

    def count(self, step: str) -> int:
        return len(self.entries(step))

    def wait_for(self, step: str, count: int = 1, timeout: float = 5.0) -> bool:
        """Block until ``step`` has been recorded at least ``count`` times.

        Returns:
            True if reached, False on timeout.
        """
        deadline = time.monotonic() + timeout
        with self._condition:
            while sum(1 for e in self._entries if e.step == step) < count:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._condition.wait(remaining)
            return True

    def clear(self) -> None:
        with self._condition:
            self._entries.clear()
