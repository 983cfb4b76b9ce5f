# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the web starter.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   python -m app.main
#   uvicorn app.main:create_app --factory --reload
# =============================================================================

import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from pymongo import AsyncMongoClient
from redis.asyncio import Redis
from starlette.types import ASGIApp, Receive, Scope, Send

from app.config import Settings, get_settings
from app.exceptions import (
    ConfigurationError,
    WebStarterException,
    unexpected_exception_handler,
    validation_exception_handler,
    web_starter_exception_handler,
)
from app.routers import health, home, users
from core.models.user import USERS_COLLECTION
from core.repositories.user_repository import UserRepository
from core.services.user_service import UserService
from lib.mongodb_client import create_mongodb_client, get_database
from lib.redis_client import CacheClient, create_redis_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from LOG_LEVEL."""
    logging.basicConfig(level=settings.log_level_number, format=LOG_FORMAT, force=True)
    # The driver logs every heartbeat at debug level
    logging.getLogger("pymongo").setLevel(max(settings.log_level_number, logging.INFO))


# =============================================================================
# Middleware
# =============================================================================

class TrimTrailingSlashMiddleware:
    """Serve "/users/" as "/users" instead of redirecting."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope)
                scope["path"] = path.rstrip("/") or "/"
        await self.app(scope, receive, send)


async def log_requests(request: Request, call_next):
    """Access log: method, path, status and duration of every request."""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # Answered with 500 by the outermost error handler
        _log_access(request, 500, started)
        raise
    _log_access(request, response.status_code, started)
    return response


def _log_access(request: Request, status_code: int, started: float) -> None:
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1fms)",
        request.method,
        request.url.path,
        status_code,
        elapsed_ms,
    )


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    settings: Settings | None = None,
    *,
    mongodb_client: AsyncMongoClient | None = None,
    redis_client: Redis | None = None,
) -> FastAPI:
    """
    Build the application.

    Clients passed in are used as-is and left open at shutdown; clients the
    app creates itself are closed at shutdown.

    Args:
        settings: Settings to use (defaults to get_settings())
        mongodb_client: Pre-built MongoDB client
        redis_client: Pre-built Redis client
    """
    if settings is None:
        settings = get_settings()

    owns_mongodb = mongodb_client is None
    owns_redis = redis_client is None
    if mongodb_client is None:
        mongodb_client = create_mongodb_client(settings)
    if redis_client is None:
        redis_client = create_redis_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: log the effective configuration
        - Shutdown: close the clients this app created
        """
        logger.info(
            "Starting web starter on %s:%s (render=%s, cache=%s)",
            settings.BIND_ADDR,
            settings.BIND_PORT,
            settings.RENDER_ENABLED,
            redis_client is not None,
        )

        yield

        logger.info("Shutting down web starter")
        if owns_redis and redis_client is not None:
            await redis_client.aclose()
        if owns_mongodb:
            await mongodb_client.close()

    app = FastAPI(
        title="Web Starter API",
        description="Layered FastAPI starter: users CRUD on MongoDB, "
                    "optional Jinja2 pages and Redis cache.",
        version=health.APP_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Users",
                "description": "Create, read, update and delete users",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    # Shared handles, read-only after this point
    repository = UserRepository(get_database(mongodb_client, settings)[USERS_COLLECTION])
    app.state.settings = settings
    app.state.mongodb_client = mongodb_client
    app.state.cache = CacheClient(redis_client)
    app.state.user_service = UserService(repository)
    app.state.templates = None

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    app.middleware("http")(log_requests)
    app.add_middleware(TrimTrailingSlashMiddleware)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(WebStarterException, web_starter_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/users", tags=["Users"])

    if settings.RENDER_ENABLED:
        _register_render_routes(app, settings)
    else:
        logger.info("Render routes disabled; serving JSON only")

    return app


def _register_render_routes(app: FastAPI, settings: Settings) -> None:
    """Register HTML pages and static assets."""
    logger.debug("Loading templates from: %s", settings.TEMPLATES_DIR)
    templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))
    templates.env.globals["assets_path"] = settings.ASSETS_PATH
    app.state.templates = templates
    app.include_router(home.router)

    if settings.ASSETS_DIR.is_dir():
        logger.debug("Serving static files from: %s", settings.ASSETS_DIR)
        app.mount(
            settings.ASSETS_PATH,
            StaticFiles(directory=str(settings.ASSETS_DIR)),
            name="assets",
        )
    else:
        logger.warning("Assets directory not found, static files disabled: %s", settings.ASSETS_DIR)


# =============================================================================
# Entry Point
# =============================================================================

def load_settings() -> Settings:
    """
    Load settings, failing fast on malformed input.

    Raises:
        ConfigurationError: If the environment can't produce valid settings
    """
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error.get("loc"))
        raise ConfigurationError(fields or str(e)) from e


def main() -> None:
    """Start the HTTP server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical("%s. %s", e.message, e.suggestion)
        sys.exit(1)

    configure_logging(settings)
    logger.debug("Server bind: address %s port %s", settings.BIND_ADDR, settings.BIND_PORT)

    uvicorn.run(
        create_app(settings),
        host=settings.BIND_ADDR,
        port=settings.BIND_PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
