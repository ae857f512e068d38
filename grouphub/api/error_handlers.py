"""Error Handlers — global exception handlers for the GroupHub API.

Invariants:
    - GroupHubError → its public envelope only (401 credentials, 500 everything else)
    - RequestValidationError → field-level error details (400)
    - Exception (catch-all) → never leaks internal details
    - Internal detail (message, acting identities) goes to the log, not the body

Design Decisions:
    - Three-layer handler: domain (GroupHubError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from grouphub.core.errors import (
    GroupHubError, ErrorSeverity, PUBLIC_SERVER_ERROR_MESSAGE,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_grouphub_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_grouphub_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GroupHubError)
    async def grouphub_error_handler(request: Request, exc: GroupHubError):
        """Handle all GroupHub domain/infrastructure errors."""
        level = (
            logging.WARNING
            if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
            else logging.ERROR
        )
        logger.log(
            level,
            f"GroupHubError: {exc.message}",
            extra={
                **exc.context.log_extra(),
                "error_code": exc.code,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "SERVER_ERROR",
                    "message": PUBLIC_SERVER_ERROR_MESSAGE,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
