"""Unit tests for observer event constructors."""

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.observer import events
from modules.observer.events import ObserverEventType

pytestmark = pytest.mark.unit


def test_event_type_values():
    assert [t.value for t in ObserverEventType] == [
        "order.created",
        "order.shipped",
        "order.delivered",
        "user.registered",
        "user.profile_creation",
        "user.external_notification",
    ]


def test_order_created_payload():
    event = events.order_created(42, 7, Decimal("99.99"))

    assert event.event_type == "order.created"
    assert dict(event.payload) == {
        "order_id": 42,
        "user_id": 7,
        "total_amount": Decimal("99.99"),
    }
    assert event.source == "order_service"


def test_order_shipped_payload():
    event = events.order_shipped(42, 7, "TRK-ABCDEF12")

    assert event.event_type == ObserverEventType.ORDER_SHIPPED.value
    assert event.get("tracking_number") == "TRK-ABCDEF12"


def test_order_delivered_payload():
    event = events.order_delivered(42, 7)

    assert event.event_type == "order.delivered"
    assert dict(event.payload) == {"order_id": 42, "user_id": 7}


def test_user_registered_payload():
    event = events.user_registered(7, "jane", "jane@example.com")

    assert event.event_type == "user.registered"
    assert event.get("email") == "jane@example.com"
    assert event.source == "user_service"


@pytest.mark.parametrize(
    "factory,event_type",
    [
        (events.user_profile_creation, "user.profile_creation"),
        (events.external_system_notification, "user.external_notification"),
    ],
)
def test_chained_events_keep_correlation_id(factory, event_type):
    correlation_id = uuid4()

    event = factory(7, correlation_id=correlation_id)

    assert event.event_type == event_type
    assert event.correlation_id == correlation_id
    assert event.get("user_id") == 7


def test_chained_event_without_correlation_id_gets_new_one():
    first = events.user_profile_creation(7)
    second = events.user_profile_creation(7)

    assert first.correlation_id != second.correlation_id
