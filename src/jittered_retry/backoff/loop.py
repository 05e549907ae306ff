"""
Retry loops and retry decorators.
"""

import asyncio
import functools
import logging
import time
from typing import Awaitable, Callable, ParamSpec, TypeVar

from .config import JitterStrategy, RetryConfig
from .jitter import RandomSource, iter_delays

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

OnRetry = Callable[[int, Exception, float], None]


def _report_retry(
    attempt: int,
    error: Exception,
    delay: float,
    config: RetryConfig,
    on_retry: OnRetry | None,
) -> None:
    if on_retry:
        on_retry(attempt, error, delay)
    else:
        logger.warning(
            f"Retry {attempt}/{config.max_sleeps}: {error}, waiting {delay:.2f}s"
        )


def _run(
    config: RetryConfig,
    operation: Callable[[], T],
    rng: RandomSource | None,
    sleep: Callable[[float], None] | None,
    on_retry: OnRetry | None,
) -> T:
    if sleep is None:
        sleep = time.sleep
    delays = iter_delays(config, rng)

    for attempt in range(1, config.attempts + 1):
        try:
            return operation()
        except Exception as e:
            if attempt >= config.attempts:
                logger.debug(f"Giving up after {attempt} attempt(s): {e}")
                raise
            delay = next(delays)
            _report_retry(attempt, e, delay, config, on_retry)
            sleep(delay)

    raise RuntimeError("Retry loop exited unexpectedly")


async def _async_run(
    config: RetryConfig,
    operation: Callable[[], Awaitable[T]],
    rng: RandomSource | None,
    sleep: Callable[[float], Awaitable[None]] | None,
    on_retry: OnRetry | None,
) -> T:
    if sleep is None:
        sleep = asyncio.sleep
    delays = iter_delays(config, rng)

    for attempt in range(1, config.attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt >= config.attempts:
                logger.debug(f"Giving up after {attempt} attempt(s): {e}")
                raise
            delay = next(delays)
            _report_retry(attempt, e, delay, config, on_retry)
            await sleep(delay)

    raise RuntimeError("Retry loop exited unexpectedly")


def retry(
    attempts: int,
    min_delay: float,
    max_delay: float,
    operation: Callable[[], T],
    *,
    rng: RandomSource | None = None,
    sleep: Callable[[float], None] | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """
    Call ``operation`` up to ``attempts`` times with exponential full jitter.

    Args:
        attempts: Maximum number of invocations (at least 1)
        min_delay: Lower delay bound in seconds
        max_delay: Upper delay bound in seconds
        operation: Zero-argument callable; raising any Exception is a failure
        rng: Randomness source (default: shared ``random.Random``)
        sleep: Blocking sleep function (default: ``time.sleep``)
        on_retry: Optional callback(attempt, exception, delay) called before each sleep

    Returns:
        The return value of the first successful call

    Raises:
        The exception of the final attempt, unchanged, once attempts run out.
        InvalidRetryConfigError if the bounds are invalid.
    """
    config = RetryConfig(attempts, min_delay, max_delay, JitterStrategy.EXPONENTIAL)
    return _run(config, operation, rng, sleep, on_retry)


def retry_decorrelated(
    attempts: int,
    min_delay: float,
    max_delay: float,
    operation: Callable[[], T],
    *,
    rng: RandomSource | None = None,
    sleep: Callable[[float], None] | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Like :func:`retry`, but each delay is drawn from ``[min_delay, 3 * previous)``."""
    config = RetryConfig(attempts, min_delay, max_delay, JitterStrategy.DECORRELATED)
    return _run(config, operation, rng, sleep, on_retry)


async def async_retry(
    attempts: int,
    min_delay: float,
    max_delay: float,
    operation: Callable[[], Awaitable[T]],
    *,
    rng: RandomSource | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Await ``operation()`` with exponential full jitter, sleeping via ``asyncio.sleep``."""
    config = RetryConfig(attempts, min_delay, max_delay, JitterStrategy.EXPONENTIAL)
    return await _async_run(config, operation, rng, sleep, on_retry)


async def async_retry_decorrelated(
    attempts: int,
    min_delay: float,
    max_delay: float,
    operation: Callable[[], Awaitable[T]],
    *,
    rng: RandomSource | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Await ``operation()`` with decorrelated jitter."""
    config = RetryConfig(attempts, min_delay, max_delay, JitterStrategy.DECORRELATED)
    return await _async_run(config, operation, rng, sleep, on_retry)


def with_retry(
    config: RetryConfig | None = None,
    on_retry: OnRetry | None = None,
    rng: RandomSource | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        on_retry: Optional callback(attempt, exception, delay) called before each retry
        rng: Randomness source (default: shared ``random.Random``)

    Returns:
        Decorated function with retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return _run(
                config,
                lambda: func(*args, **kwargs),
                rng,
                None,
                on_retry,
            )

        return wrapper

    return decorator


def async_with_retry(
    config: RetryConfig | None = None,
    on_retry: OnRetry | None = None,
    rng: RandomSource | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        on_retry: Optional callback(attempt, exception, delay) called before each retry
        rng: Randomness source (default: shared ``random.Random``)

    Returns:
        Decorated async function with retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await _async_run(
                config,
                lambda: func(*args, **kwargs),
                rng,
                None,
                on_retry,
            )

        return wrapper

    return decorator
