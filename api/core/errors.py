"""
Error taxonomy shared by the record routers and the docs gate.

Each error carries the HTTP status it maps to; `api/main.py` registers the
handlers that turn them into responses.
"""

from __future__ import annotations


class ApiError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# Body does not satisfy the resource schema.
class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


# Store unreachable or failed; includes malformed identifiers.
class StoreError(ApiError):
    status_code = 500


class AuthError(ApiError):
    status_code = 401
