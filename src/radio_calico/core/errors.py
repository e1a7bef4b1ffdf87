"""Error taxonomy shared by the store and the HTTP layer."""

from __future__ import annotations


class RadioCalicoError(Exception):
    """Base exception carrying a human-readable message and an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RadioCalicoError):
    """Raised for malformed or out-of-domain input."""

    status_code = 400


class NotFoundError(RadioCalicoError):
    """Raised when a requested entity does not exist."""

    status_code = 404


class UniquenessError(RadioCalicoError):
    """Raised when a write violates a uniqueness constraint."""

    status_code = 400


class StoreError(RadioCalicoError):
    """Raised on connectivity or internal storage failures."""

    status_code = 500
