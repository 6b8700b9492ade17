from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, Field


class OrderCreatedResponse(BaseModel):
    """Schema for a created order."""

    order_id: Annotated[
        int, Field(..., description="New order ID", json_schema_extra={"example": 1})
    ]
    user_id: Annotated[
        int, Field(..., description="Customer ID", json_schema_extra={"example": 7})
    ]
    amount: Annotated[
        Decimal,
        Field(..., description="Order total", json_schema_extra={"example": "99.99"}),
    ]
    message: str = (
        "Order created successfully. Confirmation email and warehouse "
        "notification are processed asynchronously."
    )


class OrderStatusResponse(BaseModel):
    """Schema for an order state transition."""

    order_id: Annotated[int, Field(..., description="Order ID")]
    status: Annotated[
        str,
        Field(
            ...,
            description="New order status",
            json_schema_extra={"example": "shipped"},
        ),
    ]
    tracking_number: Annotated[
        Optional[str],
        Field(
            default=None,
            description="Carrier tracking number, set once shipped",
            json_schema_extra={"example": "TRK-1A2B3C4D"},
        ),
    ] = None
    message: str


class UserRegisteredResponse(BaseModel):
    """Schema for a registered user."""

    user_id: Annotated[int, Field(..., description="New user ID")]
    username: Annotated[
        str, Field(..., description="Username", json_schema_extra={"example": "jane"})
    ]
    email: Annotated[
        str,
        Field(
            ..., description="Email", json_schema_extra={"example": "jane@example.com"}
        ),
    ]
    message: str = (
        "User registered successfully. Welcome email, profile creation and "
        "external notification run as a chain of asynchronous events."
    )


class ObserverInfoResponse(BaseModel):
    """Schema for the showcase description."""

    pattern: str = "Observer"
    description: str = (
        "In-process event dispatcher with synchronous and asynchronous listeners"
    )
    features: str = "Listener registry, bounded worker pool, event chaining"


class ActivityEntryResponse(BaseModel):
    """Schema for one recorded listener step."""

    step: str
    event_type: str
    correlation_id: str
    thread_name: str
    details: Dict[str, Any] = Field(default_factory=dict)
    recorded_at: datetime


class ExecutorStatsResponse(BaseModel):
    """Schema for worker pool counters."""

    core_pool_size: int
    max_pool_size: int
    queue_capacity: int
    saturation_policy: str
    pool_size: int
    largest_pool_size: int
    active_count: int
    queue_size: int
    completed: int
    failed: int
    rejected: int
    caller_runs: int
    discarded: int
    shutdown: bool
