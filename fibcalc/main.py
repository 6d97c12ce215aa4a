# =============================================================================
# FastAPI Application: Submission and Read Gateways over HTTP
# =============================================================================
#
# Run with:
#   uvicorn fibcalc.main:app --host 0.0.0.0 --port 8080
#   fibcalc-api
#
# LIFESPAN:
#   1. Open Postgres engine + two Redis clients (fibcalc/resources.py)
#   2. Probe each store with bounded retry; on exhaustion startup fails
#      and uvicorn exits non-zero
#   3. Build the gateways into app.state
#   4. On shutdown close every client
# =============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from fibcalc.api import health, values
from fibcalc.config import Settings, configure_logging, get_settings
from fibcalc.errors import IndexTooHighError
from fibcalc.resources import open_resources, verify_resources
from fibcalc.services.reader import ReadGateway
from fibcalc.services.submission import SubmissionGateway

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "404 Error: The requested resource was not found."

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. No connections are opened until the lifespan starts."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s v%s", settings.app_name, settings.app_version)
        async with open_resources(settings) as resources:
            await verify_resources(resources)
            app.state.submission_gateway = SubmissionGateway(
                cache=resources.cache,
                channel=resources.channel,
                store=resources.store,
                max_index=settings.max_index,
            )
            app.state.read_gateway = ReadGateway(resources.cache, resources.store)
            logger.info("API ready on %s:%d", settings.host, settings.port)
            yield
            logger.info("API shutting down...")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Submit Fibonacci indices and poll for computed values.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(IndexTooHighError)
    async def index_too_high_handler(request: Request, exc: IndexTooHighError):
        logger.info("Rejected index=%d (limit %d)", exc.index, exc.limit)
        return JSONResponse(
            status_code=422,
            content={"error": exc.reason},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error: %s", exc.errors())
        return JSONResponse(
            status_code=422,
            content={"error": "Validation failed", "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    # -------------------------------------------------------------------------
    # Routes: the catch-all must be registered last
    # -------------------------------------------------------------------------

    app.include_router(health.router)
    app.include_router(values.router)

    @app.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
    async def not_found(path: str) -> PlainTextResponse:
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)

    return app


def run() -> None:
    """Console entry point: ``fibcalc-api``."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


app = create_app()


if __name__ == "__main__":
    run()
