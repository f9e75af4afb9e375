"""
Application exceptions.

Routes and services raise these; the API layer renders them into the
`{"ok": false, "message": ..., "error": ...}` envelope.
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    """
    Base exception for errors that map to an HTTP response.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code to respond with
        details: Extra context returned under "error"
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class BadRequestError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Not authorized", details: Any = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class NotFoundError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class ExternalServiceError(AppError):
    """
    A third-party API call failed.

    Client modules subclass this so that an unhandled gateway failure still
    renders with the upstream status code (or 502 when there is none).
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Any = None,
    ):
        super().__init__(message, status_code, details)
