"""
Jittered Retry - Exception Hierarchy.
"""

from .base import RetryError, InvalidRetryConfigError

__all__ = [
    "RetryError",
    "InvalidRetryConfigError",
]
