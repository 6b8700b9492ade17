from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.errors import setup_error_handlers
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.lifespan import lifespan

logger = get_module_logger()


def create_app() -> FastAPI:
    """Build the FastAPI application; the event system starts in the lifespan."""
    settings = get_settings()

    app = FastAPI(title="Observer Showcase", lifespan=lifespan)
    setup_rate_limiter(app)
    setup_error_handlers(app)

    allow_origins = (
        ["*"]
        if settings.is_production
        else [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app


handler = create_app()
