"""
Exception hierarchy for the booking core.

Model functions raise these; the app-level error handlers in app.py turn
them into the standard JSON error envelope using ``status_code``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base application error. Catch this to handle domain errors only."""

    status_code = 500

    def __init__(self, message: str, *, cause: Exception | None = None, **details) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is not None:
            return f"{base} (causa: {self.cause})"
        return base


class ValidationError(AppError):
    """Missing or malformed input (required field, invalid instant, bad status)."""

    status_code = 400


class NotFoundError(AppError):
    """Room, client or reservation does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Overlapping window, room under maintenance, or invalid status transition."""

    status_code = 409


class InternalError(AppError):
    """Storage failure. The message shown to callers stays generic."""

    status_code = 500


__all__ = [
    'AppError',
    'ValidationError',
    'NotFoundError',
    'ConflictError',
    'InternalError',
]
