from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced staff, event or work log does not exist."""


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness rule."""


class BatchRejectedError(DomainError):
    """Raised when a confirmed import contains at least one row in error.

    Carries the per-row results so the caller can fix the sheet and resubmit.
    """

    def __init__(self, message: str, *, results: list[Any], summary: Optional[dict] = None):
        super().__init__(message)
        self.results = results
        self.summary = summary or {}


class PersistenceError(DomainError):
    """Raised when the store fails during an atomic write; nothing was committed."""
