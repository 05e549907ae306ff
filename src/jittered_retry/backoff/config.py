"""
Retry configuration and jitter strategy definitions.
"""

from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvalidRetryConfigError


class JitterStrategy(str, Enum):
    """Available jitter strategies."""

    EXPONENTIAL = "exponential"  # uniform in [0, min(max, min * 2**n)), floored at min
    DECORRELATED = "decorrelated"  # uniform in [min, 3 * previous), capped at max


@dataclass
class RetryConfig:
    """
    Configuration for a single retry sequence.

    Attributes:
        attempts: Maximum number of invocations of the operation (default: 5)
        min_delay: Lower delay bound in seconds (default: 0.1)
        max_delay: Upper delay bound in seconds (default: 3.0)
        strategy: Jitter strategy to use (default: exponential)

    ``min_delay <= max_delay`` is not checked. With inverted bounds every
    computed delay is ``min_delay``.
    """

    attempts: int = 5
    min_delay: float = 0.1
    max_delay: float = 3.0
    strategy: JitterStrategy = JitterStrategy.EXPONENTIAL

    def __post_init__(self) -> None:
        if isinstance(self.attempts, bool) or not isinstance(self.attempts, int):
            raise InvalidRetryConfigError(
                "attempts must be an integer", field="attempts", value=self.attempts
            )
        if self.attempts < 1:
            raise InvalidRetryConfigError(
                "attempts must be at least 1", field="attempts", value=self.attempts
            )
        for name in ("min_delay", "max_delay"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidRetryConfigError(
                    f"{name} must not be negative", field=name, value=value
                )
        try:
            self.strategy = JitterStrategy(self.strategy)
        except ValueError:
            raise InvalidRetryConfigError(
                "unknown jitter strategy", field="strategy", value=self.strategy
            ) from None

    @property
    def max_sleeps(self) -> int:
        """Number of delays a fully failing sequence inserts."""
        return self.attempts - 1

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            attempts=10,
            min_delay=0.5,
            max_delay=30.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            attempts=3,
            min_delay=0.05,
            max_delay=1.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(attempts=1)
