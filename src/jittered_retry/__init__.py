"""
Jittered Retry - Retry with backoff and jitter.

Call a fallible operation until it succeeds or the attempt budget runs out,
sleeping a randomized delay between attempts so that independent callers do
not retry in lockstep.
"""

from .exceptions import RetryError, InvalidRetryConfigError
from .backoff import (
    RetryConfig,
    JitterStrategy,
    capped_exponential,
    next_delay,
    iter_delays,
    retry,
    retry_decorrelated,
    async_retry,
    async_retry_decorrelated,
    with_retry,
    async_with_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "RetryError",
    "InvalidRetryConfigError",
    # Configuration
    "RetryConfig",
    "JitterStrategy",
    # Delays
    "capped_exponential",
    "next_delay",
    "iter_delays",
    # Retry loops
    "retry",
    "retry_decorrelated",
    "async_retry",
    "async_retry_decorrelated",
    "with_retry",
    "async_with_retry",
]
