"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- auth (register/login/me), users, messages, contacts, metrics, realtime /ws
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka

from dmchat.config.logging_config import setup_logging, correlation_id_var, NO_CORRELATION_ID
from dmchat.config.settings import Config, get_config
from dmchat.domain.exceptions import StorageError
from dmchat.observability import MetricsErrorType, increment_error
from dmchat.setup.ioc.container import create_container
from dmchat.presentation.api import (
    auth_router,
    users_router,
    messages_router,
    contacts_router,
    metrics_router,
)
from dmchat.presentation.realtime import realtime_router

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: container already created; APP-scoped dependencies are lazy
    - Shutdown: close DI container (disconnects Prisma)
    """
    logger.info("FastAPI application started. DI container initialized.")
    yield
    await app.state.dishka_container.close()
    logger.info("FastAPI application shutdown. DI container closed.")


def create_fastapi_app(
    container: Optional[AsyncContainer] = None,
    config: Optional[type[Config]] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: DI container to use; defaults to the Prisma-backed one
        config: settings class; defaults to get_config() for APP_ENV

    Returns:
        FastAPI application instance
    """
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_PATH)

    app = FastAPI(
        title="Direct Message API",
        description="Direct-message chat backend with realtime delivery",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(config=config), app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Validation error handler - shows detailed Pydantic errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info("Validation error on %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation error",
                "details": jsonable_encoder(errors, custom_encoder={Exception: str}),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error("HTTP %s on %s: %s", exc.status_code, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError):
        increment_error(MetricsErrorType.STORAGE_FAILED)
        logger.error("Storage failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=503,
            content={"error": "Storage unavailable"},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        increment_error(MetricsErrorType.UNHANDLED)
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": f"Internal server error: {str(exc)}"},
        )

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "FastAPI server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(auth_router)  # POST /api/register, /api/login, GET /api/me
    app.include_router(users_router)  # GET /api/users
    app.include_router(messages_router)  # GET/DELETE /api/messages/{other_id}
    app.include_router(contacts_router)  # DELETE /api/contacts/{contact_id}
    app.include_router(metrics_router)  # GET /metrics
    app.include_router(realtime_router)  # WS /ws

    return app


# Create the app instance
app = create_fastapi_app()
