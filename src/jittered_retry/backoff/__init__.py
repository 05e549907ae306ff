"""
Jittered Retry - Backoff Logic.

Retry loops with exponential (full) and decorrelated jitter.
"""

from .config import RetryConfig, JitterStrategy
from .jitter import capped_exponential, next_delay, iter_delays
from .loop import (
    retry,
    retry_decorrelated,
    async_retry,
    async_retry_decorrelated,
    with_retry,
    async_with_retry,
)

__all__ = [
    "RetryConfig",
    "JitterStrategy",
    "capped_exponential",
    "next_delay",
    "iter_delays",
    "retry",
    "retry_decorrelated",
    "async_retry",
    "async_retry_decorrelated",
    "with_retry",
    "async_with_retry",
]
