from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.events import TaskRejectedError
from infrastructure.logging import get_module_logger
from modules.observer.service import ServiceValidationError

logger = get_module_logger()


async def task_rejected_handler(request: Request, exc: Exception):
    """Return 503 when the worker pool refuses a listener task."""
    logger.warning(
        "request_rejected_pool_unavailable",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return JSONResponse(
        status_code=503,
        content={"message": "Event processing is unavailable", "detail": str(exc)},
    )


async def service_validation_handler(request: Request, exc: Exception):
    """Return 400 for arguments the services refuse."""
    logger.info("request_invalid", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def validation_error_handler(request: Request, exc: Exception):
    """Return 400 instead of 422 for malformed query and path parameters."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request parameters",
            "detail": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors
            ],
        },
    )


def setup_error_handlers(app: FastAPI):
    """
    Map domain exceptions to HTTP responses for the FastAPI application.
    """
    app.add_exception_handler(TaskRejectedError, task_rejected_handler)
    app.add_exception_handler(ServiceValidationError, service_validation_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
