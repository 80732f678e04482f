"""Linear reconnect backoff with a fixed ceiling"""
from dataclasses import dataclass

from redis.backoff import AbstractBackoff

from .exceptions import BackoffError

DEFAULT_STEP_MS = 50
DEFAULT_CEILING_MS = 2000


@dataclass(frozen=True)
class LinearBackoff:
    """
    Delay before the next reconnect attempt.
    attempt counts consecutive failures from 1.
    Formula: min(attempt * step_ms, ceiling_ms).
    """
    step_ms: int = DEFAULT_STEP_MS
    ceiling_ms: int = DEFAULT_CEILING_MS

    def __post_init__(self):
        if self.step_ms <= 0:
            raise BackoffError(f"step_ms must be positive, got {self.step_ms}")
        if self.ceiling_ms < self.step_ms:
            raise BackoffError(
                f"ceiling_ms ({self.ceiling_ms}) must not be below step_ms ({self.step_ms})"
            )

    def delay_ms(self, attempt: int) -> int:
        if isinstance(attempt, bool) or not isinstance(attempt, int):
            raise TypeError(f"attempt must be an int, got {type(attempt).__name__}")
        if attempt < 1:
            raise BackoffError(f"attempt counts from 1, got {attempt}")
        return min(attempt * self.step_ms, self.ceiling_ms)

    def delay_seconds(self, attempt: int) -> float:
        return self.delay_ms(attempt) / 1000


DEFAULT_POLICY = LinearBackoff()


def backoff(attempt: int) -> int:
    """Milliseconds to wait before reconnect attempt number ``attempt``"""
    return DEFAULT_POLICY.delay_ms(attempt)


class RedisLinearBackoff(AbstractBackoff):
    """Plugs a LinearBackoff into redis-py's Retry"""

    def __init__(self, policy: LinearBackoff = DEFAULT_POLICY):
        self.policy = policy

    def reset(self):
        # stateless; redis-py passes the failure count on every call
        pass

    def compute(self, failures: int) -> float:
        return self.policy.delay_seconds(failures)
