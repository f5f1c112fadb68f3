# src/errors.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to and a short machine code; the
handlers registered in ``src.app`` turn them into ``{"code", "message"}``
responses so services never import FastAPI.
"""


class AppError(Exception):
    status_code = 500
    code = "app_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400
    code = "validation_error"


class ConflictError(AppError):
    """A unique field (username, email) is already taken."""
    status_code = 400
    code = "conflict"


class UnauthorizedError(AppError):
    status_code = 401
    code = "unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class InternalError(AppError):
    status_code = 500
    code = "internal_error"
