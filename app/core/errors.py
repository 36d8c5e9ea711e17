"""Error taxonomy and the handlers that render it as JSON."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MeterReadingError(Exception):
    """Base class for errors surfaced to API callers."""

    error_code: str = "INTERNAL_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_description: str = "Internal server error"

    def __init__(self, description: str | None = None) -> None:
        self.description = description or self.default_description
        super().__init__(self.description)


class InvalidDataError(MeterReadingError):
    """Malformed or missing input."""

    error_code = "INVALID_DATA"
    status_code = status.HTTP_400_BAD_REQUEST
    default_description = "The data provided in the request is invalid"


class NotFoundError(MeterReadingError):
    """Referenced reading or customer does not exist."""

    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_description = "Reading not found"


class AlreadyConfirmedError(MeterReadingError):
    """Reading was confirmed before."""

    error_code = "ALREADY_CONFIRMED"
    status_code = status.HTTP_409_CONFLICT
    default_description = "Reading has already been confirmed"


class InternalError(MeterReadingError):
    """Unexpected store failure; details stay in the server log."""


def error_response(status_code: int, error_code: str, description: str) -> JSONResponse:
    """Build the uniform ``{error_code, error_description}`` body."""
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "error_description": description},
    )


async def meter_reading_error_handler(request: Request, exc: MeterReadingError) -> JSONResponse:
    return error_response(exc.status_code, exc.error_code, exc.description)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(
        InvalidDataError.status_code,
        InvalidDataError.error_code,
        InvalidDataError.default_description,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(
        InternalError.status_code,
        InternalError.error_code,
        InternalError.default_description,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to an application."""
    app.add_exception_handler(MeterReadingError, meter_reading_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
