"""Event models for infrastructure event system.

Provides the immutable Event record handed to every listener.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
from uuid import UUID, uuid4


EventType = Union[str, Enum]


def normalize_event_type(event_type: EventType) -> str:
    """Return the plain string tag for an event type.

    Enum members are reduced to their value so that registry keys and
    ``Event.event_type`` always compare as strings.

    Raises:
        ValueError: If the resulting tag is empty.
    """
    if isinstance(event_type, Enum):
        event_type = event_type.value
    if not isinstance(event_type, str) or not event_type.strip():
        raise ValueError("event_type must be a non-empty string")
    return event_type


@dataclass(frozen=True)
class Event:
    """Base class for all events in the system.

    Events are immutable records of something that happened. Once handed to
    the dispatcher an event is shared read-only by every listener, so the
    payload is exposed as a read-only mapping.
    """

    event_type: str
    """The type of event (e.g., 'order.created')."""

    payload: Mapping[str, Any] = field(default_factory=dict)
    """Attributes specific to the event type."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """ID shared by an event and the events chained from it."""

    source: str = ""
    """Component that published the event."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_type", normalize_event_type(self.event_type))
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def get(self, key: str, default: Any = None) -> Any:
        """Shortcut for ``event.payload.get(key, default)``."""
        return self.payload.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        Returns:
            Dictionary representation of the event with ISO format timestamp
            and UUID as string.
        """
        return {
            "event_type": self.event_type,
            "payload": dict(self.payload),
            "timestamp": self.timestamp.isoformat(),
            "correlation_id": str(self.correlation_id),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Deserialize event from dictionary.

        Args:
            data: Dictionary with event fields.

        Returns:
            Event instance.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        try:
            if isinstance(data.get("timestamp"), str):
                timestamp = datetime.fromisoformat(data["timestamp"])
            else:
                timestamp = data.get("timestamp") or datetime.now()

            correlation_id: Optional[Union[str, UUID]] = data.get("correlation_id")
            if isinstance(correlation_id, str):
                correlation_id = UUID(correlation_id)
            elif correlation_id is None:
                correlation_id = uuid4()

            return cls(
                event_type=data["event_type"],
                payload=data.get("payload") or {},
                timestamp=timestamp,
                correlation_id=correlation_id,
                source=data.get("source", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid event data: {e}") from e

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))
