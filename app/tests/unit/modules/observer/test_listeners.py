"""Unit tests for the observer listeners."""

from decimal import Decimal

import pytest

from infrastructure.events import ExecutionMode, ListenerRegistry
from modules.observer import events
from modules.observer.listeners import (
    OrderEventListener,
    UserRegistrationListener,
    observer_registrar,
)

pytestmark = pytest.mark.unit


def describe(registry, event_type):
    return [
        (r.name.split(".")[-1], r.mode, r.order) for r in registry.resolve(event_type)
    ]


@pytest.fixture
def order_listener(activity, fast_observer_settings, mock_sleep):
    return OrderEventListener(activity, fast_observer_settings, sleep=mock_sleep)


@pytest.fixture
def user_listener(mock_dispatcher, activity, fast_observer_settings, mock_sleep):
    return UserRegistrationListener(
        mock_dispatcher, activity, fast_observer_settings, sleep=mock_sleep
    )


class TestOrderEventListener:
    """Test order lifecycle listeners."""

    def test_registration_modes_and_order(self, order_listener):
        registry = ListenerRegistry()

        order_listener.register(registry)

        last = 2**31 - 1
        assert describe(registry, "order.created") == [
            ("handle_order_created", ExecutionMode.SYNC, 1),
            ("send_order_confirmation_email", ExecutionMode.ASYNC, last),
            ("notify_warehouse", ExecutionMode.ASYNC, last),
        ]
        assert describe(registry, "order.shipped") == [
            ("handle_order_shipped", ExecutionMode.SYNC, last),
            ("send_shipping_notification", ExecutionMode.ASYNC, last),
        ]
        assert describe(registry, "order.delivered") == [
            ("handle_order_delivered", ExecutionMode.SYNC, last),
            ("request_feedback", ExecutionMode.ASYNC, last),
        ]

    def test_handle_order_created_records_without_delay(
        self, order_listener, activity, mock_sleep
    ):
        order_listener.handle_order_created(
            events.order_created(42, 7, Decimal("99.99"))
        )

        assert activity.entries("order_created")[0].details == {"order_id": 42}
        mock_sleep.assert_not_called()

    @pytest.mark.parametrize(
        "method,event,step,delay_attr",
        [
            (
                "send_order_confirmation_email",
                events.order_created(1, 2, Decimal("5")),
                "order_confirmation_email_sent",
                "email_delay_seconds",
            ),
            (
                "notify_warehouse",
                events.order_created(1, 2, Decimal("5")),
                "warehouse_notified",
                "warehouse_delay_seconds",
            ),
            (
                "send_shipping_notification",
                events.order_shipped(1, 2, "TRK-00000000"),
                "shipping_notification_sent",
                "email_delay_seconds",
            ),
            (
                "request_feedback",
                events.order_delivered(1, 2),
                "feedback_requested",
                "email_delay_seconds",
            ),
        ],
    )
    def test_async_steps_simulate_latency(
        self,
        order_listener,
        activity,
        mock_sleep,
        fast_observer_settings,
        method,
        event,
        step,
        delay_attr,
    ):
        getattr(order_listener, method)(event)

        mock_sleep.assert_called_once_with(getattr(fast_observer_settings, delay_attr))
        assert activity.count(step) == 1

    def test_shipped_and_delivered_are_recorded(self, order_listener, activity):
        order_listener.handle_order_shipped(events.order_shipped(1, 2, "TRK-1"))
        order_listener.handle_order_delivered(events.order_delivered(1, 2))

        assert activity.entries("order_shipped")[0].details["tracking_number"] == (
            "TRK-1"
        )
        assert activity.count("order_delivered") == 1


class TestUserRegistrationListener:
    """Test the user onboarding chain."""

    def test_registration_modes_and_order(self, user_listener):
        registry = ListenerRegistry()

        user_listener.register(registry)

        assert describe(registry, "user.registered") == [
            ("handle_user_registered", ExecutionMode.SYNC, 1),
            ("send_welcome_email", ExecutionMode.ASYNC, 2),
            ("setup_default_preferences", ExecutionMode.ASYNC, 2**31 - 1),
        ]
        assert describe(registry, "user.profile_creation") == [
            ("create_user_profile", ExecutionMode.ASYNC, 3)
        ]
        assert describe(registry, "user.external_notification") == [
            ("notify_external_system", ExecutionMode.ASYNC, 4)
        ]

    def test_welcome_email_publishes_profile_creation(
        self, user_listener, mock_dispatcher, mock_sleep, activity
    ):
        registered = events.user_registered(7, "jane", "jane@example.com")

        user_listener.send_welcome_email(registered)

        mock_sleep.assert_called_once_with(0.01)
        (published,), _ = mock_dispatcher.publish.call_args
        assert published.event_type == "user.profile_creation"
        assert published.get("user_id") == 7
        assert published.correlation_id == registered.correlation_id
        assert activity.count("welcome_email_sent") == 1

    def test_profile_creation_publishes_external_notification(
        self, user_listener, mock_dispatcher
    ):
        profile = events.user_profile_creation(7)

        user_listener.create_user_profile(profile)

        (published,), _ = mock_dispatcher.publish.call_args
        assert published.event_type == "user.external_notification"
        assert published.correlation_id == profile.correlation_id

    def test_failed_welcome_email_does_not_chain(
        self, user_listener, mock_dispatcher, mock_sleep
    ):
        mock_sleep.side_effect = RuntimeError("smtp down")

        with pytest.raises(RuntimeError):
            user_listener.send_welcome_email(events.user_registered(7, "j", "j@x.io"))

        mock_dispatcher.publish.assert_not_called()

    def test_terminal_steps_do_not_publish(
        self, user_listener, mock_dispatcher, activity
    ):
        user_listener.handle_user_registered(events.user_registered(7, "j", "j@x.io"))
        user_listener.notify_external_system(events.external_system_notification(7))
        user_listener.setup_default_preferences(
            events.user_registered(7, "j", "j@x.io")
        )

        mock_dispatcher.publish.assert_not_called()
        assert activity.count("user_registered") == 1
        assert activity.count("external_system_notified") == 1
        assert activity.count("default_preferences_set") == 1


def test_observer_registrar_wires_both_listener_groups(
    activity, fast_observer_settings, mock_dispatcher
):
    registry = ListenerRegistry()

    observer_registrar(activity, fast_observer_settings)(registry, mock_dispatcher)

    assert sorted(registry.get_registered_events()) == sorted(
        t.value for t in events.ObserverEventType
    )
    assert len(registry) == 12
