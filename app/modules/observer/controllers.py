from decimal import Decimal
from typing import Annotated, List, Optional

from fastapi import APIRouter, Path, Query, Request

from api.dependencies.rate_limits import PUBLISH_LIMIT, READ_LIMIT, get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import WorkerPoolDep
from modules.observer import schemas
from modules.observer.dependencies import (
    ActivityLogDep,
    OrderServiceDep,
    UserServiceDep,
)

logger = get_module_logger()
limiter = get_limiter()

# Controllers are thin adapters: they read query parameters, call the
# publisher services and return Pydantic response models. Errors are mapped
# to HTTP status codes by the handlers in api.dependencies.errors.
router = APIRouter(prefix="/api/observer", tags=["observer"])

UserId = Annotated[int, Query(gt=0, description="Customer ID", examples=[7])]
OrderId = Annotated[int, Path(gt=0, description="Order ID")]


@router.post("/orders", response_model=schemas.OrderCreatedResponse)
@limiter.limit(PUBLISH_LIMIT)
def create_order_endpoint(
    request: Request,  # pylint: disable=unused-argument
    orders: OrderServiceDep,
    user_id: UserId,
    amount: Annotated[Decimal, Query(gt=0, description="Order total")],
):
    """Create an order.

    The synchronous listener acknowledges the order before the response is
    returned; the confirmation email and warehouse notification run on the
    worker pool afterwards.
    """
    logger.info("create_order_requested", user_id=user_id, amount=str(amount))
    order_id = orders.create_order(user_id, amount)
    return schemas.OrderCreatedResponse(
        order_id=order_id, user_id=user_id, amount=amount
    )


@router.put("/orders/{order_id}/ship", response_model=schemas.OrderStatusResponse)
@limiter.limit(PUBLISH_LIMIT)
def ship_order_endpoint(
    request: Request,  # pylint: disable=unused-argument
    orders: OrderServiceDep,
    order_id: OrderId,
    user_id: UserId,
):
    """Ship an order; the shipping notification is sent asynchronously."""
    logger.info("ship_order_requested", order_id=order_id, user_id=user_id)
    tracking_number = orders.ship_order(order_id, user_id)
    return schemas.OrderStatusResponse(
        order_id=order_id,
        status="shipped",
        tracking_number=tracking_number,
        message="Order shipped. Shipping notification will be sent asynchronously.",
    )


@router.put("/orders/{order_id}/deliver", response_model=schemas.OrderStatusResponse)
@limiter.limit(PUBLISH_LIMIT)
def deliver_order_endpoint(
    request: Request,  # pylint: disable=unused-argument
    orders: OrderServiceDep,
    order_id: OrderId,
    user_id: UserId,
):
    """Deliver an order; the feedback request is sent asynchronously."""
    logger.info("deliver_order_requested", order_id=order_id, user_id=user_id)
    orders.deliver_order(order_id, user_id)
    return schemas.OrderStatusResponse(
        order_id=order_id,
        status="delivered",
        message="Order delivered. Feedback request will be sent asynchronously.",
    )


@router.post("/users/register", response_model=schemas.UserRegisteredResponse)
@limiter.limit(PUBLISH_LIMIT)
def register_user_endpoint(
    request: Request,  # pylint: disable=unused-argument
    users: UserServiceDep,
    username: Annotated[str, Query(min_length=1, max_length=100)],
    email: Annotated[str, Query(min_length=3, max_length=254)],
):
    """Register a user and start the onboarding event chain."""
    logger.info("register_user_requested", username=username)
    user_id = users.register_user(username, email)
    return schemas.UserRegisteredResponse(
        user_id=user_id, username=username, email=email
    )


@router.get("/info", response_model=schemas.ObserverInfoResponse)
@limiter.limit(READ_LIMIT)
def get_info(request: Request):  # pylint: disable=unused-argument
    return schemas.ObserverInfoResponse()


@router.get("/executor", response_model=schemas.ExecutorStatsResponse)
@limiter.limit(READ_LIMIT)
def get_executor_stats(
    request: Request, pool: WorkerPoolDep
):  # pylint: disable=unused-argument
    """Worker pool counters: threads, queue depth, completed and failed tasks."""
    return schemas.ExecutorStatsResponse(**pool.stats())


@router.get("/activity", response_model=List[schemas.ActivityEntryResponse])
@limiter.limit(READ_LIMIT)
def get_activity(
    request: Request,  # pylint: disable=unused-argument
    activity: ActivityLogDep,
    step: Annotated[Optional[str], Query(description="Filter by step")] = None,
):
    """Listener steps recorded so far, oldest first."""
    return [
        schemas.ActivityEntryResponse(**entry.to_dict())
        for entry in activity.entries(step)
    ]
