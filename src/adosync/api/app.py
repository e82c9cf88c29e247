"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from adosync.api.dependencies import close_client, init_client
from adosync.api.models import APIResponse, FailureDetail
from adosync.api.routes import tickets
from adosync.client import (
    DevOpsError,
    NoResponseError,
    RequestFailedError,
    ResponseParseError,
    UnexpectedShapeError,
)
from adosync.config import Settings
from adosync.submitter import NoChangesError
from adosync.sync import describe_failure

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = app.state.settings if hasattr(app.state, "settings") else None
    init_client(settings or Settings.from_env())
    yield
    await close_client()


def _failure(status_code: int, error: DevOpsError, detail: FailureDetail | None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[FailureDetail](
            data=detail, error=describe_failure(error)
        ).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map remote service failures to API responses."""

    @app.exception_handler(RequestFailedError)
    async def request_failed_handler(_request: Request, exc: RequestFailedError) -> JSONResponse:
        return _failure(
            status.HTTP_502_BAD_GATEWAY,
            exc,
            FailureDetail(status_code=exc.status_code, body=exc.body),
        )

    @app.exception_handler(ResponseParseError)
    async def parse_error_handler(_request: Request, exc: ResponseParseError) -> JSONResponse:
        return _failure(status.HTTP_502_BAD_GATEWAY, exc, FailureDetail(body=exc.body))

    @app.exception_handler(UnexpectedShapeError)
    async def unexpected_shape_handler(
        _request: Request, exc: UnexpectedShapeError
    ) -> JSONResponse:
        return _failure(status.HTTP_502_BAD_GATEWAY, exc, FailureDetail(body=exc.payload))

    @app.exception_handler(NoResponseError)
    async def no_response_handler(_request: Request, exc: NoResponseError) -> JSONResponse:
        return _failure(status.HTTP_200_OK, exc, None)

    @app.exception_handler(NoChangesError)
    async def no_changes_handler(_request: Request, exc: NoChangesError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Connection settings; read from the environment at startup
            when omitted.
    """
    app = FastAPI(
        title="adosync API",
        description="Azure DevOps work items as Markdown documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    if settings is not None:
        app.state.settings = settings

    register_exception_handlers(app)
    app.include_router(tickets.router, prefix="/api/v1")

    return app
