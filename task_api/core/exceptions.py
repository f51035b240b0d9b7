"""
Expected failures raised by the stores and services.

Each class carries the ``error`` kind and HTTP status that the application's
exception handler puts on the wire as ``{"error": ..., "message": ...}``.
Anything that is not a ``ServiceError`` is treated as unexpected and answered
with a generic 500.
"""

from typing import Optional


class ServiceError(Exception):
    error = "InternalServerError"
    status_code = 500
    default_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    error = "ValidationError"
    status_code = 400
    default_message = "Request is invalid."


class Conflict(ServiceError):
    error = "Conflict"
    status_code = 409
    default_message = "An account with this email already exists."


class InvalidCredentials(ServiceError):
    error = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid email or password."


class Unauthorized(ServiceError):
    error = "Unauthorized"
    status_code = 401
    default_message = "No Authorization header provided. Include: Authorization: Bearer <token>"


class InvalidToken(ServiceError):
    error = "InvalidToken"
    status_code = 401
    default_message = "Token is invalid or malformed."


class TokenExpired(ServiceError):
    error = "TokenExpired"
    status_code = 401
    default_message = "Your token has expired. Please log in again."


class NotFound(ServiceError):
    error = "NotFound"
    status_code = 404
    default_message = "Task not found."
