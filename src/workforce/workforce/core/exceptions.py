from __future__ import annotations

from typing import Mapping, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field_errors`` maps form field names to messages so callers can show
    each error next to the offending field.
    """

    def __init__(self, message: Optional[str] = None, *, field_errors: Optional[Mapping[str, str]] = None):
        self.field_errors: dict[str, str] = dict(field_errors or {})
        if message is None:
            message = next(iter(self.field_errors.values()), "Invalid input")
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a referenced helper or contractor does not exist."""


class ConfigurationError(DomainError):
    """Raised when required startup configuration is missing."""


class StoreError(DomainError):
    """Raised by the remote store adapter when a request fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class DataAccessError(DomainError):
    """Stable, user-facing failure of a data layer operation."""


class LoadError(DataAccessError):
    """One or more collections could not be fetched."""

    def __init__(self, message: str = "Failed to load data", *, failed: Sequence[str] = ()):
        super().__init__(message)
        self.failed = tuple(failed)


class SaveError(DataAccessError):
    """A create, update or upsert was rejected by the store."""


class DeleteError(DataAccessError):
    """A delete was rejected by the store."""
