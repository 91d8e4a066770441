"""FastAPI app factory: request logging middleware plus the path dispatcher."""
from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response

from . import __version__
from .api import install_dispatcher
from .config import Settings, load_settings
from .domain.routes import build_router
from .logging_conf import get_logger

logger = get_logger("bookserver")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI app for `settings` (environment defaults if omitted).

    Run directly with: `uvicorn bookserver.main:create_app --factory`
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("startup", extra={"event": "startup", "variant": settings.variant})
        yield
        logger.info("shutdown", extra={"event": "shutdown"})

    # No docs/openapi routes: every path belongs to the route table.
    app = FastAPI(
        title="bookserver",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.path_router = build_router(settings.variant)

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with a correlation id.

        - Reuses an incoming X-Request-ID, otherwise mints one
        - Logs start and end with method/path/status/elapsed_ms
        - Echoes X-Request-ID on the response
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    install_dispatcher(app, app.state.path_router)

    return app
