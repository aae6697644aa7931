"""
Yolomy Products Backend — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers; the
       lifespan opens the database connection handle on startup and closes
       it on shutdown.
Who:   uvicorn (`uvicorn yolomy.main:app`) or the `yolomy` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → GZip → CORS →   │
    │              Unhandled errors                       │
    │                                                     │
    │  Routes:                                            │
    │    GET/POST /api/products   DELETE /api/products/id │
    │    GET /api/products/id/image   GET /health         │
    │                                                     │
    │  Exception Handlers:                                │
    │    Validation→400 │ NotFound→404 │ Database→500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → open DB handle → ping (log result, never abort)
    Shutdown: close DB handle
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
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from yolomy import __version__
from yolomy.config import Settings, settings as default_settings
from yolomy.database import DatabaseConnection
from yolomy.exceptions import DatabaseError, NotFoundError, ValidationError, YolomyError
from yolomy.middleware.errors import UnhandledErrorMiddleware, internal_error_response
from yolomy.middleware.logging import RequestLoggingMiddleware
from yolomy.middleware.request_id import RequestIDMiddleware, request_id_var
from yolomy.routes import health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure root logging once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the database connection handle for the life of the process.

    A failed startup ping is logged, not raised: the server keeps serving
    and requests report the outage as 500s until the database comes back.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("Yolomy products backend %s starting up", __version__)

    database = DatabaseConnection.from_settings(config).connect()
    app.state.database = database

    try:
        await run_in_threadpool(database.ping)
        logger.info("Database connected successfully")
    except Exception as e:
        logger.error("Database connection error: %s", str(e))

    logger.info("Server listening on port %d", config.port)

    yield

    logger.info("Shutting down...")
    database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": ...}` responses.

    Handler hierarchy:
        ValidationError         → 400 (with details)
        RequestValidationError  → 400 (FastAPI's own parameter validation)
        NotFoundError           → 404
        HTTPException           → its own status (unknown route, bad method)
        DatabaseError           → 500
        YolomyError (base)      → 500

    Anything else is caught by UnhandledErrorMiddleware (500).

    500 bodies carry an opaque message unless settings.expose_error_details
    is set, in which case the raw underlying error text is returned.
    """
    config: Settings = app.state.settings

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "details": exc.context},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": {"errors": errors}},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return internal_error_response(config, exc.context.get("original_error", exc.message))

    @app.exception_handler(YolomyError)
    async def handle_application_error(request: Request, exc: YolomyError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return internal_error_response(config, exc.message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use; defaults to the environment-loaded settings.
    """
    config = config or default_settings

    app = FastAPI(
        title="Yolomy Products API",
        description="Product catalogue backend: list, add and delete products.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config

    # Middleware executes in REVERSE order of addition.
    app.add_middleware(UnhandledErrorMiddleware)
    origins = config.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Start uvicorn on the configured host and port."""
    uvicorn.run(
        "yolomy.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
