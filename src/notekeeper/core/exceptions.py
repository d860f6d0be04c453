"""
Service-level errors and the handlers that turn them into JSON responses.

Services raise these instead of HTTP errors; ``register_exception_handlers``
maps them onto status codes when the app is built.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .logging import get_logger

logger = get_logger("errors")


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class InvalidArgument(ServiceError):
    """Missing or malformed input, including malformed ids."""

    status_code = 400


class NotFound(ServiceError):
    """Referenced record does not exist.

    Answered with 400 rather than 404 to stay compatible with existing clients.
    """

    status_code = 400


class Conflict(ServiceError):
    """Write would break a uniqueness or ownership rule."""

    status_code = 409


class InternalFailure(ServiceError):
    """Unexpected store failure; the response body stays empty."""

    status_code = 500

    def to_body(self) -> Dict[str, Any]:
        return {}


def _json_error(body: Dict[str, Any], status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the app."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(
                "Service failure",
                exc_info=exc.__cause__ or exc,
                extra={"path": request.url.path, "method": request.method},
            )
        else:
            logger.warning(
                exc.message,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": type(exc).__name__,
                    "status_code": exc.status_code,
                },
            )
        return _json_error(exc.to_body(), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request data", extra={"path": request.url.path})
        return _json_error(
            {"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())}, 400
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        logger.error("Store failure", exc_info=exc, extra={"path": request.url.path})
        return _json_error({"message": str(exc)}, 500)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
        return _json_error({"message": str(exc)}, 500)
