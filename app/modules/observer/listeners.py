"""Observer showcase listeners.

Two listener groups subscribe to the order and user lifecycle events:

- ``OrderEventListener`` acknowledges each order transition synchronously
  and fans the slow follow-up work (emails, warehouse) out to the pool.
- ``UserRegistrationListener`` demonstrates chaining: the welcome email
  publishes ``user.profile_creation``, whose listener publishes
  ``user.external_notification``. Every link keeps the correlation id of
  the original registration.

Slow collaborators are simulated with ``sleep`` calls sized by
``ObserverFeatureSettings``.
"""

import threading
import time
from typing import Callable

from infrastructure.configuration import ObserverFeatureSettings
from infrastructure.events import (
    Event,
    EventDispatcher,
    ExecutionMode,
    ListenerRegistry,
)
from infrastructure.logging import get_module_logger
from modules.observer import events as observer_events
from modules.observer.activity import ActivityLog
from modules.observer.events import ObserverEventType

logger = get_module_logger()

SYNC = ExecutionMode.SYNC
ASYNC = ExecutionMode.ASYNC


class OrderEventListener:
    """Reacts to order created, shipped and delivered events."""

    def __init__(
        self,
        activity: ActivityLog,
        settings: ObserverFeatureSettings,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.activity = activity
        self.settings = settings
        self._sleep = sleep

    def register(self, registry: ListenerRegistry) -> None:
        created = ObserverEventType.ORDER_CREATED
        registry.register(created, self.handle_order_created, mode=SYNC, order=1)
        registry.register(created, self.send_order_confirmation_email, mode=ASYNC)
        registry.register(created, self.notify_warehouse, mode=ASYNC)

        shipped = ObserverEventType.ORDER_SHIPPED
        registry.register(shipped, self.handle_order_shipped, mode=SYNC)
        registry.register(shipped, self.send_shipping_notification, mode=ASYNC)

        delivered = ObserverEventType.ORDER_DELIVERED
        registry.register(delivered, self.handle_order_delivered, mode=SYNC)
        registry.register(delivered, self.request_feedback, mode=ASYNC)

    def handle_order_created(self, event: Event) -> None:
        logger.info(
            "order_created",
            order_id=event.get("order_id"),
            user_id=event.get("user_id"),
            total_amount=str(event.get("total_amount")),
            thread=threading.current_thread().name,
        )
        self.activity.record("order_created", event, order_id=event.get("order_id"))

    def send_order_confirmation_email(self, event: Event) -> None:
        order_id = event.get("order_id")
        logger.info("sending_order_confirmation_email", order_id=order_id)
        self._sleep(self.settings.email_delay_seconds)
        logger.info("order_confirmation_email_sent", order_id=order_id)
        self.activity.record("order_confirmation_email_sent", event, order_id=order_id)

    def notify_warehouse(self, event: Event) -> None:
        order_id = event.get("order_id")
        logger.info("notifying_warehouse", order_id=order_id)
        self._sleep(self.settings.warehouse_delay_seconds)
        logger.info("warehouse_notified", order_id=order_id)
        self.activity.record("warehouse_notified", event, order_id=order_id)

    def handle_order_shipped(self, event: Event) -> None:
        logger.info(
            "order_shipped",
            order_id=event.get("order_id"),
            tracking_number=event.get("tracking_number"),
            thread=threading.current_thread().name,
        )
        self.activity.record(
            "order_shipped",
            event,
            order_id=event.get("order_id"),
            tracking_number=event.get("tracking_number"),
        )

    def send_shipping_notification(self, event: Event) -> None:
        order_id = event.get("order_id")
        tracking_number = event.get("tracking_number")
        logger.info(
            "sending_shipping_notification",
            order_id=order_id,
            tracking_number=tracking_number,
        )
        self._sleep(self.settings.email_delay_seconds)
        logger.info("shipping_notification_sent", order_id=order_id)
        self.activity.record(
            "shipping_notification_sent",
            event,
            order_id=order_id,
            tracking_number=tracking_number,
        )

    def handle_order_delivered(self, event: Event) -> None:
        logger.info(
            "order_delivered",
            order_id=event.get("order_id"),
            user_id=event.get("user_id"),
            thread=threading.current_thread().name,
        )
        self.activity.record("order_delivered", event, order_id=event.get("order_id"))

    def request_feedback(self, event: Event) -> None:
        order_id = event.get("order_id")
        logger.info("requesting_feedback", order_id=order_id)
        self._sleep(self.settings.email_delay_seconds)
        logger.info("feedback_request_sent", order_id=order_id)
        self.activity.record("feedback_requested", event, order_id=order_id)


class UserRegistrationListener:
    """Reacts to user registration and drives the onboarding chain."""

    def __init__(
        self,
        dispatcher: EventDispatcher,
        activity: ActivityLog,
        settings: ObserverFeatureSettings,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.dispatcher = dispatcher
        self.activity = activity
        self.settings = settings
        self._sleep = sleep

    def register(self, registry: ListenerRegistry) -> None:
        registered = ObserverEventType.USER_REGISTERED
        registry.register(registered, self.handle_user_registered, mode=SYNC, order=1)
        registry.register(registered, self.send_welcome_email, mode=ASYNC, order=2)
        registry.register(registered, self.setup_default_preferences, mode=ASYNC)
        registry.register(
            ObserverEventType.USER_PROFILE_CREATION,
            self.create_user_profile,
            mode=ASYNC,
            order=3,
        )
        registry.register(
            ObserverEventType.EXTERNAL_SYSTEM_NOTIFICATION,
            self.notify_external_system,
            mode=ASYNC,
            order=4,
        )

    def handle_user_registered(self, event: Event) -> None:
        logger.info(
            "user_registered",
            user_id=event.get("user_id"),
            username=event.get("username"),
            email=event.get("email"),
            thread=threading.current_thread().name,
        )
        self.activity.record("user_registered", event, user_id=event.get("user_id"))

    def send_welcome_email(self, event: Event) -> None:
        user_id = event.get("user_id")
        logger.info("sending_welcome_email", user_id=user_id, email=event.get("email"))
        self._sleep(self.settings.email_delay_seconds)
        logger.info("welcome_email_sent", user_id=user_id)
        self.activity.record("welcome_email_sent", event, user_id=user_id)

        self.dispatcher.publish(
            observer_events.user_profile_creation(
                user_id, correlation_id=event.correlation_id
            )
        )

    def create_user_profile(self, event: Event) -> None:
        user_id = event.get("user_id")
        logger.info("creating_user_profile", user_id=user_id)
        self._sleep(self.settings.profile_delay_seconds)
        logger.info("user_profile_created", user_id=user_id)
        self.activity.record("user_profile_created", event, user_id=user_id)

        self.dispatcher.publish(
            observer_events.external_system_notification(
                user_id, correlation_id=event.correlation_id
            )
        )

    def notify_external_system(self, event: Event) -> None:
        user_id = event.get("user_id")
        logger.info("notifying_external_system", user_id=user_id)
        self._sleep(self.settings.external_system_delay_seconds)
        logger.info("external_system_notified", user_id=user_id)
        self.activity.record("external_system_notified", event, user_id=user_id)

    def setup_default_preferences(self, event: Event) -> None:
        user_id = event.get("user_id")
        logger.info("setting_up_default_preferences", user_id=user_id)
        self._sleep(self.settings.preferences_delay_seconds)
        logger.info("default_preferences_set", user_id=user_id)
        self.activity.record("default_preferences_set", event, user_id=user_id)


def observer_registrar(
    activity: ActivityLog,
    settings: ObserverFeatureSettings,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[ListenerRegistry, EventDispatcher], None]:
    """Build the registrar that wires both listener groups at startup.

    Usage:
        create_event_system(settings, registrars=[observer_registrar(activity, s)])
    """

    def register(registry: ListenerRegistry, dispatcher: EventDispatcher) -> None:
        OrderEventListener(activity, settings, sleep=sleep).register(registry)
        UserRegistrationListener(
            dispatcher, activity, settings, sleep=sleep
        ).register(registry)
        logger.info("observer_listeners_registered")

    return register
