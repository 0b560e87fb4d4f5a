"""
Failure kinds surfaced at the API boundary.

Each one maps to a single status code and a human-readable message; the
exception handlers in `main.py` turn them into JSON responses.
"""

from __future__ import annotations


class ApiError(RuntimeError):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"message": self.message}


class ValidationFailed(ApiError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: dict[str, str], message: str | None = None) -> None:
        self.errors = dict(errors)
        super().__init__(message)

    def to_body(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class InvalidCredentials(ApiError):
    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class StoreError(ApiError):
    """
    The credential store could not be reached or rejected the statement.

    Never conflated with NotFound or InvalidCredentials.
    """

    status_code = 500
