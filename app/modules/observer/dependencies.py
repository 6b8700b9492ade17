"""FastAPI dependencies for the observer showcase.

The services and the activity log are created once by the server lifespan
and stored on ``app.state``.
"""

from typing import Annotated

from fastapi import Depends, Request

from modules.observer.activity import ActivityLog
from modules.observer.service import OrderEventService, UserEventService


def get_order_service(request: Request) -> OrderEventService:
    return request.app.state.order_service


def get_user_service(request: Request) -> UserEventService:
    return request.app.state.user_service


def get_activity_log(request: Request) -> ActivityLog:
    return request.app.state.activity_log


OrderServiceDep = Annotated[OrderEventService, Depends(get_order_service)]
UserServiceDep = Annotated[UserEventService, Depends(get_user_service)]
ActivityLogDep = Annotated[ActivityLog, Depends(get_activity_log)]
