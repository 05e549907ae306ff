"""
Base exception classes for retry configuration.

The retry loops never raise these for a failing operation: the operation's own
exception is always re-raised unchanged. These only signal a retry sequence
that cannot be started.
"""

from typing import Any


class RetryError(Exception):
    """Base exception for all errors raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRetryConfigError(RetryError, ValueError):
    """Raised when retry bounds or the strategy selector are invalid."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} ({self.field}={self.value!r})"
        return self.message
