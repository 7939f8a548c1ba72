"""
FastAPI application entry point.
Mounts routes, middleware (CORS, Prometheus), error handlers and startup hooks.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.config import get_settings
from app.api.v1.router import api_router
from app.core.errors import (
    UnprocessableEntityError,
    request_validation_handler,
    unprocessable_entity_handler,
)
from app.core.logging import configure_logging
from app.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown: dispose the connection pool on the way out."""
    logger.info("Starting %s", app.title)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        description="REST resource for managing users: paging, upsert, JSON Patch, content negotiation.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers; expose the headers clients need to read
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Pagination"],
    )

    app.add_exception_handler(UnprocessableEntityError, unprocessable_entity_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
