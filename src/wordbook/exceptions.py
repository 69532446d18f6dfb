"""
Wordbook exceptions.

Scheduling itself never raises to the caller; these cover configuration,
input validation and the record store's write path.
"""
from typing import Optional


class WordbookError(Exception):
    """Base exception for all wordbook errors."""

    def __init__(self, message: str, details: Optional[dict[str, object]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class InvalidConfiguration(WordbookError):
    """Raised when the interval table or other settings are unusable."""


class PersistenceFailure(WordbookError):
    """
    Raised when the record store rejects a write.

    The stored word is left as it was before the failed write.
    """


class WordValidationError(WordbookError, ValueError):
    """Raised when a new word is missing required text."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ReviewSessionError(WordbookError):
    """Raised when a finished review session is asked for more work."""
