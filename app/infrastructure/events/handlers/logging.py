"""Event trail handler for event system.

Writes every dispatched event to the structured logs before any other
listener sees it.
"""

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LoggingHandler:
    """Handles structured logging for events."""

    def __init__(self):
        """Initialize logging handler with base logger."""
        self.log = logger.bind(component="logging_handler")

    def handle(self, event: Event) -> None:
        """Handle event by logging with structured fields.

        Args:
            event: The event to log.
        """
        self.log.info(
            "event_occurred",
            event_type=event.event_type,
            correlation_id=str(event.correlation_id),
            source=event.source,
            payload=event.to_dict()["payload"],
            timestamp=event.timestamp.isoformat(),
        )
