from typing import Optional

from fastapi import FastAPI

from libris.core.config import Settings, get_settings
from libris.core.logger import setup_logger
from libris.api.dispatcher import build_resource_router
from libris.api.errors import add_error_handlers
from libris.api.resources import RESOURCES
from libris.api.routers import health


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    setup_logger(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Entitlement-gated catalog API for authors, books, users and roles",
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    add_error_handlers(app)

    app.include_router(health.router)
    for resource in RESOURCES:
        app.include_router(build_resource_router(resource), prefix=settings.api_prefix)

    return app


app = create_app()
