"""
Business error hierarchy raised by the service layer and translated to HTTP
responses by the API exception handlers.

Storage failures are not wrapped: SQLAlchemy exceptions propagate as-is and are
answered by the generic 500 handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    """One violated constraint on one request field."""
    field: str
    message: str


class NinjaApiError(Exception):
    """Base exception for business errors surfaced to API clients."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(NinjaApiError):
    """Referenced record does not exist."""

    http_status = 404


class ValidationError(NinjaApiError):
    """Client supplied data that violates a declared constraint."""

    http_status = 400

    def __init__(self, errors: List[FieldError], message: Optional[str] = None) -> None:
        super().__init__(message or "One or more fields are invalid")
        self.errors = list(errors)
