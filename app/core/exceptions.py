# File: app/core/exceptions.py

"""
Domain errors raised by services and stores.

Each class carries the HTTP status the API boundary renders it with, so the
exception handlers in app/main.py stay a single generic mapping.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class AccessDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class InvalidTokenError(UnauthenticatedError):
    default_message = "Invalid authentication token"


class ExpiredTokenError(UnauthenticatedError):
    default_message = "Authentication token has expired"


class InvalidCredentialsError(UnauthenticatedError):
    default_message = "Invalid email or password"


class InvalidArgumentError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid argument"


class EmailTakenError(AppError):
    # Conflict, rendered as 400 to match the registration contract.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email is already taken"
