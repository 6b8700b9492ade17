"""Observer showcase event types and constructors.

Each constructor builds an immutable infrastructure ``Event`` with the
payload keys its listeners rely on.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from infrastructure.events import Event


class ObserverEventType(str, Enum):
    """Event types published by the order and user lifecycle services."""

    ORDER_CREATED = "order.created"
    ORDER_SHIPPED = "order.shipped"
    ORDER_DELIVERED = "order.delivered"
    USER_REGISTERED = "user.registered"
    USER_PROFILE_CREATION = "user.profile_creation"
    EXTERNAL_SYSTEM_NOTIFICATION = "user.external_notification"


ORDER_SOURCE = "order_service"
USER_SOURCE = "user_service"
USER_LISTENER_SOURCE = "user_registration_listener"


def order_created(order_id: int, user_id: int, total_amount: Decimal) -> Event:
    return Event(
        event_type=ObserverEventType.ORDER_CREATED,
        payload={
            "order_id": order_id,
            "user_id": user_id,
            "total_amount": total_amount,
        },
        source=ORDER_SOURCE,
    )


def order_shipped(order_id: int, user_id: int, tracking_number: str) -> Event:
    return Event(
        event_type=ObserverEventType.ORDER_SHIPPED,
        payload={
            "order_id": order_id,
            "user_id": user_id,
            "tracking_number": tracking_number,
        },
        source=ORDER_SOURCE,
    )


def order_delivered(order_id: int, user_id: int) -> Event:
    return Event(
        event_type=ObserverEventType.ORDER_DELIVERED,
        payload={"order_id": order_id, "user_id": user_id},
        source=ORDER_SOURCE,
    )


def user_registered(user_id: int, username: str, email: str) -> Event:
    return Event(
        event_type=ObserverEventType.USER_REGISTERED,
        payload={"user_id": user_id, "username": username, "email": email},
        source=USER_SOURCE,
    )


def _chained(
    event_type: ObserverEventType, user_id: int, correlation_id: Optional[UUID]
) -> Event:
    if correlation_id is None:
        return Event(
            event_type=event_type,
            payload={"user_id": user_id},
            source=USER_LISTENER_SOURCE,
        )
    return Event(
        event_type=event_type,
        payload={"user_id": user_id},
        correlation_id=correlation_id,
        source=USER_LISTENER_SOURCE,
    )


def user_profile_creation(user_id: int, correlation_id: Optional[UUID] = None) -> Event:
    """Follow-on event published once the welcome email went out."""
    return _chained(ObserverEventType.USER_PROFILE_CREATION, user_id, correlation_id)


def external_system_notification(
    user_id: int, correlation_id: Optional[UUID] = None
) -> Event:
    """Follow-on event published once the user profile exists."""
    return _chained(
        ObserverEventType.EXTERNAL_SYSTEM_NOTIFICATION, user_id, correlation_id
    )


ALL_EVENT_TYPES = tuple(ObserverEventType)
