from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.events import EventSystem, create_event_system
from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_settings
from modules.observer import (
    ALL_EVENT_TYPES,
    ActivityLog,
    OrderEventService,
    UserEventService,
    observer_registrar,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _start_event_system(
    app: FastAPI, settings: "Settings", logger: BoundLogger
) -> EventSystem:
    activity = ActivityLog()
    event_system = create_event_system(
        settings,
        registrars=[observer_registrar(activity, settings.observer)],
        trail_event_types=ALL_EVENT_TYPES,
    )

    app.state.event_system = event_system
    app.state.activity_log = activity
    app.state.order_service = OrderEventService(event_system.dispatcher)
    app.state.user_service = UserEventService(event_system.dispatcher)

    logger.info("event_system_started", **event_system.pool.stats())
    return event_system


def _stop_event_system(event_system: EventSystem, logger: BoundLogger) -> None:
    report = event_system.shutdown()
    logger.info(
        "event_system_stopped",
        completed=report.completed,
        failed=report.failed,
        discarded=report.discarded,
        still_running=report.still_running,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    event_system = _start_event_system(app, settings, logger)

    yield

    logger.info("application_shutdown")
    _stop_event_system(event_system, logger)
