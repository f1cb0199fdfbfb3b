"""
Domain errors raised by the service layer.

Handlers let these propagate; the exception handlers registered in
app.main turn them into the ``{"error": ..., "details": ...}`` envelope.
"""
from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(AppError):
    # State conflicts (already processed, already led) are client errors
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


def error_body(message: str, details: Optional[str] = None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body
