"""
Jittered delay calculation.

Both strategies follow
https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
"""

import math
import random
from typing import Iterator, Protocol

from .config import JitterStrategy, RetryConfig
from ..exceptions import InvalidRetryConfigError

# Random.random() is a single C call, so one shared instance is safe across threads.
_default_rng = random.Random()


class RandomSource(Protocol):
    """Anything that yields floats uniformly distributed in [0, 1)."""

    def random(self) -> float: ...


def capped_exponential(base: float, exponent: int, cap: float) -> float:
    """
    Return ``min(cap, base * 2**exponent)`` without overflowing.

    Args:
        base: Multiplier in seconds
        exponent: Power of two to apply
        cap: Saturation value

    Returns:
        The capped product
    """
    try:
        value = math.ldexp(base, exponent)
    except OverflowError:
        return cap
    return min(value, cap)


def next_delay(
    strategy: JitterStrategy,
    previous_delay: float,
    attempt: int,
    min_delay: float,
    max_delay: float,
    rng: RandomSource | None = None,
) -> float:
    """
    Calculate the delay before the next attempt.

    Args:
        strategy: Which jitter formula to apply
        previous_delay: Last delay of this sequence (``min_delay`` before the first)
        attempt: Number of attempts that have failed so far, starting at 1
        min_delay: Lower bound in seconds
        max_delay: Upper bound in seconds
        rng: Randomness source (default: shared ``random.Random``)

    Returns:
        Delay in seconds. When the range to draw from is empty or inverted
        the result is exactly ``min_delay``.
    """
    if rng is None:
        rng = _default_rng

    if min_delay >= max_delay:
        return min_delay

    if strategy == JitterStrategy.EXPONENTIAL:
        ceiling = capped_exponential(min_delay, attempt, max_delay)
        if ceiling <= min_delay:
            return min_delay
        return max(rng.random() * ceiling, min_delay)

    if strategy == JitterStrategy.DECORRELATED:
        upper = 3 * previous_delay
        if upper <= min_delay:
            return min_delay
        delay = min_delay + rng.random() * (upper - min_delay)
        return max(min(delay, max_delay), min_delay)

    raise InvalidRetryConfigError("unknown jitter strategy", field="strategy", value=strategy)


def iter_delays(config: RetryConfig, rng: RandomSource | None = None) -> Iterator[float]:
    """
    Yield the delays of one retry sequence, one per failed attempt but the last.

    Decorrelated state lives in the generator, so every call starts fresh.
    """
    previous = config.min_delay
    for attempt in range(1, config.attempts):
        delay = next_delay(
            config.strategy,
            previous,
            attempt,
            config.min_delay,
            config.max_delay,
            rng,
        )
        yield delay
        previous = delay
