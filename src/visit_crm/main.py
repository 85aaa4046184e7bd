"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import customers, dashboard, health, regions
from .config import settings
from .services.data_service import DataService


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    service = getattr(app.state, "data_service", None)
    if service is not None:
        service.shutdown()


def create_app(data_service: DataService | None = None) -> FastAPI:
    """Build the API. The data service is created on first request unless one is supplied."""
    app = FastAPI(title=settings.app_name, lifespan=_lifespan)
    app.state.data_service = data_service

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(customers.router, prefix=settings.api_prefix)
    app.include_router(regions.router, prefix=settings.api_prefix)
    app.include_router(dashboard.router, prefix=settings.api_prefix)
    return app


app = create_app()
