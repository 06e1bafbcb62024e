"""
Main API module for linkmap.

Responsibilities:
    - Expose REST endpoints for creating and resolving short identifiers
    - Translate core errors into fixed status codes and messages
    - Log each request (method, path, status, latency)

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - One container per app: a single in-memory store shared by both
      operations, plus the configured identifier provider.
    - Endpoints are plain `def`s; FastAPI runs them in its thread pool, so the
      store sees truly concurrent requests and synchronizes internally.

Endpoints:
    POST /      {"url": "..."}  -> 200 {"id": "..."} | 400 {"message": "Invalid URL"}
    GET  /{id}                  -> 200 {"url": "..."} | 404 {"message": "Not found"}
"""

import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from linkmap.config import settings
from linkmap.container import Container, build_container
from linkmap.errors import AppError


class CreateMappingRequest(BaseModel):
    """Request payload for creating a new mapping."""
    url: str


class MappingCreated(BaseModel):
    id: str


class MappingResolved(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    message: str


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        container (Optional[Container]): Pre-wired operations. When omitted a
            fresh container is built from config, so each app gets its own
            empty store.

    Returns:
        FastAPI: A fully configured application instance.
    """
    # Docs live under a nested path so GET /{id} owns every single-segment path.
    app = FastAPI(
        title="linkmap",
        description="In-memory URL shortener",
        docs_url="/_meta/docs",
        openapi_url="/_meta/openapi.json",
        redoc_url=None,
    )
    log = logging.getLogger("linkmap")

    # basic console logging unless the host process configured it already
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    container = container if container is not None else build_container()
    app.state.container = container
    log.info("linkmap ready (store=%s)", type(container.store).__name__)

    # ----------------------------------------------------------------
    # Error translation
    # ----------------------------------------------------------------
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        level = logging.WARNING if exc.status_code >= 500 else logging.INFO
        log.log(level, "%s %s -> %s: %s", request.method, request.url.path,
                type(exc).__name__, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=exc.public_message).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        log.info("%s %s -> malformed body", request.method, request.url.path)
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(message="Invalid request body").model_dump(),
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        log.debug(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post(
        "/",
        response_model=MappingCreated,
        responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    )
    def create_mapping(req: CreateMappingRequest) -> MappingCreated:
        """Shorten `req.url`; returns the new identifier."""
        return MappingCreated(id=container.create_mapping.execute(req.url))

    @app.get(
        "/{id}",
        response_model=MappingResolved,
        responses={404: {"model": ErrorResponse}},
    )
    def resolve_mapping(id: str) -> MappingResolved:
        """Return the full URL stored for `id`."""
        return MappingResolved(url=container.resolve_mapping.execute(id))

    return app


# `uvicorn main:app` and `from main import app` keep working.
app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
