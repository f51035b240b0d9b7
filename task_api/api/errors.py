"""
Centralized error responses.

Every error leaves the service as ``{"error": <kind>, "message": <text>}``.
Unexpected exceptions are logged here with their traceback and answered with
a generic 500 body that never carries internals.
"""

from http import HTTPStatus
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.core.exceptions import ServiceError, ValidationError
from task_api.core.logger import setup_logger

logger = setup_logger(__name__)

_LOCATION_ROOTS = {"body", "query", "path", "header"}


def error_response(status_code: int, error: str, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
        headers=headers,
    )


def describe_validation_error(error: Dict[str, Any]) -> str:
    """Turn one pydantic error into a sentence such as ``"title is required."``."""
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS)
    kind = error.get("type")

    if kind == "json_invalid":
        return "Request body is not valid JSON."
    if kind == "missing":
        return f"{field} is required." if field else "Request body is required."
    if kind == "value_error":
        # Messages raised by our own validators are already phrased for clients
        cause = error.get("ctx", {}).get("error")
        if cause is not None:
            return str(cause)
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


def describe_validation_errors(errors: List[Dict[str, Any]]) -> str:
    messages = []
    for error in errors:
        message = describe_validation_error(error)
        if message not in messages:
            messages.append(message)
    return " ".join(messages) or ValidationError.default_message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.status_code, exc.error, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            ValidationError.error,
            describe_validation_errors(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both count as "no such route"
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(
                status.HTTP_404_NOT_FOUND,
                "NotFound",
                f"Route {request.method} {request.url.path} does not exist.",
            )
        phrase = HTTPStatus(exc.status_code).phrase.replace(" ", "")
        return error_response(exc.status_code, phrase, str(exc.detail), exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ServiceError.error,
            ServiceError.default_message,
        )
