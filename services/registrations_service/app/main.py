"""FastAPI application for the Registrations Service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.registrations_service.routers import (
    admin_router,
    dashboard_router,
    registration_router,
    therapists_router,
)


def create_app() -> FastAPI:
    """Create and configure the Registrations Service FastAPI app."""
    settings = get_settings()
    app = FastAPI(
        title="PijatJogja Registrations Service",
        version="0.1.0",
        description="Therapist registrations, approval workflow and roster.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_observability_middleware(app)
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "registrations"}

    app.include_router(registration_router)
    app.include_router(admin_router)
    app.include_router(therapists_router)
    app.include_router(dashboard_router)

    return app


app = create_app()
