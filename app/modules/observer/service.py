"""Publisher-facing services for the observer showcase.

The services own no state beyond an id sequence; every side effect of an
order or registration happens in the listeners reached through the
dispatcher.
"""

import itertools
import time
import uuid
from decimal import Decimal, InvalidOperation
from typing import Iterator, Union

from infrastructure.events import EventDispatcher
from infrastructure.logging import get_module_logger
from modules.observer import events as observer_events

logger = get_module_logger()


class ServiceValidationError(ValueError):
    """Raised when a publisher service refuses its arguments."""


def _id_sequence() -> Iterator[int]:
    return itertools.count(int(time.time() * 1000))


def _positive_id(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ServiceValidationError(f"{name} must be a positive integer")
    return value


def generate_tracking_number() -> str:
    """Return a tracking number such as ``TRK-1A2B3C4D``."""
    return "TRK-" + uuid.uuid4().hex[:8].upper()


class OrderEventService:
    """Creates, ships and delivers orders by publishing lifecycle events."""

    def __init__(self, dispatcher: EventDispatcher):
        self._dispatcher = dispatcher
        self._order_ids = _id_sequence()

    def create_order(
        self, user_id: int, total_amount: Union[Decimal, str, float]
    ) -> int:
        """Create an order and publish ``order.created``.

        Args:
            user_id: Customer placing the order.
            total_amount: Order total; must be positive.

        Returns:
            The new order id.

        Raises:
            ServiceValidationError: If the user id or amount is invalid.
            TaskRejectedError: If the worker pool refuses a follow-up listener.
        """
        _positive_id(user_id, "user_id")
        try:
            amount = Decimal(str(total_amount))
        except InvalidOperation as e:
            raise ServiceValidationError(
                f"Invalid total_amount: {total_amount!r}"
            ) from e
        if not amount.is_finite() or amount <= 0:
            raise ServiceValidationError("total_amount must be a positive amount")

        order_id = next(self._order_ids)
        logger.info(
            "creating_order", order_id=order_id, user_id=user_id, amount=str(amount)
        )
        self._dispatcher.publish(
            observer_events.order_created(order_id, user_id, amount)
        )
        logger.info("order_created_event_published", order_id=order_id)
        return order_id

    def ship_order(self, order_id: int, user_id: int) -> str:
        """Ship an order and publish ``order.shipped``.

        Returns:
            The generated tracking number.
        """
        _positive_id(order_id, "order_id")
        _positive_id(user_id, "user_id")

        tracking_number = generate_tracking_number()
        logger.info(
            "shipping_order", order_id=order_id, tracking_number=tracking_number
        )
        self._dispatcher.publish(
            observer_events.order_shipped(order_id, user_id, tracking_number)
        )
        logger.info("order_shipped_event_published", order_id=order_id)
        return tracking_number

    def deliver_order(self, order_id: int, user_id: int) -> None:
        """Mark an order delivered and publish ``order.delivered``."""
        _positive_id(order_id, "order_id")
        _positive_id(user_id, "user_id")

        logger.info("delivering_order", order_id=order_id)
        self._dispatcher.publish(observer_events.order_delivered(order_id, user_id))
        logger.info("order_delivered_event_published", order_id=order_id)


class UserEventService:
    """Registers users by publishing ``user.registered``."""

    def __init__(self, dispatcher: EventDispatcher):
        self._dispatcher = dispatcher
        self._user_ids = _id_sequence()

    def register_user(self, username: str, email: str) -> int:
        """Register a user and start the onboarding chain.

        Returns:
            The new user id.

        Raises:
            ServiceValidationError: If the username or email is blank or malformed.
        """
        username = (username or "").strip()
        email = (email or "").strip()
        if not username:
            raise ServiceValidationError("username must not be empty")
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ServiceValidationError(f"Invalid email address: {email!r}")

        user_id = next(self._user_ids)
        logger.info(
            "registering_user", user_id=user_id, username=username, email=email
        )
        self._dispatcher.publish(
            observer_events.user_registered(user_id, username, email)
        )
        logger.info("user_registered_event_published", user_id=user_id)
        return user_id
