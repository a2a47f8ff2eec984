"""
Blog API Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds the app, its Database context, middleware,
       exception handlers and routers. `main()` serves it with uvicorn.
Who:   uvicorn (`uvicorn blogapi.main:app` or the `blog-api` script) and
       the test suite, which builds apps against throwaway databases.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  app.state.settings   app.state.database            │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:  /home /login /user /user/profile          │
    │           /articles[...] /health                    │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │   Unauthorized→401 │ BadRequest→400 │ 405 │ DB→500  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi import __version__
from blogapi.config import Settings, settings as default_settings
from blogapi.database import Database
from blogapi.exceptions import (
    BlogAPIError,
    MalformedBodyError,
    MalformedIdentifierError,
)
from blogapi.middleware.logging import RequestLoggingMiddleware
from blogapi.middleware.request_id import RequestIDMiddleware, request_id_var
from blogapi.routes import articles, health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party loggers are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, report where the server listens.
    Shutdown: dispose the database engine (closes every pooled connection).
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Blog API starting up (version %s)...", __version__)
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Blog API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _plain_error(status_code: int, message: str, headers: Optional[dict] = None) -> PlainTextResponse:
    return PlainTextResponse(content=message, status_code=status_code, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text error responses carrying the message.

    Handler table:
        BlogAPIError            → exc.status_code (401 / 400 / 500)
        RequestValidationError  → 400 (malformed body or identifier)
        StarletteHTTPException  → its own status (405 wrong method, 404)
        Exception (fallback)    → 500 with the exception's message
    """

    @app.exception_handler(BlogAPIError)
    async def handle_blog_error(request: Request, exc: BlogAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _plain_error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """
        FastAPI reports unreadable bodies and unparseable path ids the same
        way; split them back into the two bad-request kinds.
        """
        rid = request_id_var.get("")
        errors = exc.errors()
        path_errors = [e for e in errors if e.get("loc", ())[:1] == ("path",)]

        error: BlogAPIError
        if path_errors:
            loc = path_errors[0]["loc"]
            error = MalformedIdentifierError(
                param=str(loc[-1]),
                value=str(path_errors[0].get("input")),
            )
        else:
            error = MalformedBodyError(context={"errors": len(errors)})

        logger.warning("[%s] %s: %s", rid, type(error).__name__, error.message)
        return _plain_error(error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _plain_error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _plain_error(500, str(exc) or "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app with; defaults to the
                      environment-derived module singleton.

    Returns:
        A FastAPI instance owning its own Database context.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Blog API",
        description=(
            "Minimal blogging backend: register or log in by email, publish short "
            "articles, comment on and like/dislike them, and view your profile."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = Database(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executed in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(articles.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


def main() -> None:
    """Serve the application with uvicorn using the environment's settings."""
    uvicorn.run(
        "blogapi.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn imports `blogapi.main:app`
app = create_app()
