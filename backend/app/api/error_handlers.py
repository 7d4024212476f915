"""Error Handlers — global exception handlers for the API.

Invariants:
    - ApiError → {"error": message} with the error's own status
    - RequestValidationError (unparseable or non-object body) → 400 {"error": message}
    - Exception (catch-all) → 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ApiError, MalformedBodyError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        """Handle all domain/infrastructure errors."""
        logger.error(
            f"ApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Bodies FastAPI could not parse into a JSON object."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        error = MalformedBodyError(_build_validation_message(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )


def _build_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if errors and errors[0].get("type") == "json_invalid":
        return "Request body is not valid JSON"
    return MalformedBodyError().message
