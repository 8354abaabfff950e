"""
community_hub.errors

Typed application errors.

Responsibilities:
- Define the error taxonomy raised by services, access control and auth.
- Carry the HTTP status each error maps to; translation happens in `api.errors`.
"""

from __future__ import annotations

from collections.abc import Mapping


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Validation error"

    def __init__(
        self,
        errors: Mapping[str, str] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        # Field name (wire spelling) -> human readable message.
        self.errors: dict[str, str] = dict(errors or {})


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = 403
    default_message = "Access denied"


class NotFound(AppError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Resource already exists"


class ServiceUnavailable(AppError):
    status_code = 503
    default_message = "Service unavailable"


# --- Module Notes -----------------------------------------------------------
# Routers never build HTTP responses for these; they propagate to the handlers
# installed by `community_hub.api.errors.install_error_handlers`.
