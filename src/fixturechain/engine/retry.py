# src/fixturechain/engine/retry.py
"""RetryPolicy: Retry logic with tenacity integration.

Every mutating or verifying step of a record chain runs through a
RetryPolicy:
- Fixed attempt limit (total tries, not retries)
- Pluggable backoff function from attempt number to seconds
- Exception filter deciding which failures are retried
- NonRetryableError (preconditions, type mismatches) is never retried

On exhaustion the last failure is re-raised unchanged so callers can
inspect the root cause directly.
"""

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt

from fixturechain.contracts.config import POLICY_DEFAULTS, RuntimeRetryConfig, RuntimeRetryProtocol
from fixturechain.contracts.engine import RetryPolicySpec
from fixturechain.contracts.errors import NonRetryableError, RetryableError
from fixturechain.core.logging import get_logger

if TYPE_CHECKING:
    from fixturechain.core.config import RetrySettings

T = TypeVar("T")

Backoff = Callable[[int], float]

logger = get_logger(__name__)


def exponential_backoff(base: float = 3.0, max_delay: float | None = None) -> Backoff:
    """Build a backoff function waiting ``base ** attempt`` seconds.

    attempt is the 1-based number of the attempt that just failed, so the
    default base of 3 waits 3, 9, 27, 81 seconds.

    Args:
        base: Exponential base
        max_delay: Optional cap on a single wait in seconds
    """

    def backoff(attempt: int) -> float:
        try:
            delay = float(base**attempt)
        except OverflowError:
            if max_delay is None:
                raise
            return max_delay
        if max_delay is not None:
            return min(delay, max_delay)
        return delay

    return backoff


class RetryPolicy:
    """Re-executes a zero-argument action on failure.

    Immutable once constructed. Uses tenacity for the retry loop; sleep is
    injectable so tests never actually wait.

    Example:
        policy = RetryPolicy(max_attempts=3, backoff=exponential_backoff(2.0))
        policy.execute(lambda: api.create_contact(account_id))

        # Only retry explicitly marked transient failures
        policy = RetryPolicy(retry_on=(RetryableError,))
    """

    def __init__(
        self,
        max_attempts: int = int(POLICY_DEFAULTS["max_attempts"]),
        *,
        backoff: Backoff | None = None,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Callable[[int, BaseException], None] | None = None,
    ) -> None:
        """Initialize the policy.

        Args:
            max_attempts: Total number of tries, including the first
            backoff: Attempt number -> wait seconds (default 3 ** attempt)
            retry_on: Exception types that trigger a retry
            sleep: Blocking wait used between attempts
            on_retry: Optional callback (attempt, error), fired only when a retry will follow

        Raises:
            ValueError: If max_attempts < 1 or retry_on is empty
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if not retry_on:
            raise ValueError("retry_on must name at least one exception type")
        self._max_attempts = max_attempts
        self._backoff = backoff if backoff is not None else exponential_backoff(float(POLICY_DEFAULTS["exponential_base"]))
        self._retry_on = retry_on
        self._sleep = sleep
        self._on_retry = on_retry

    @classmethod
    def default(cls, *, sleep: Callable[[float], None] = time.sleep) -> "RetryPolicy":
        """Five attempts, 3 ** attempt backoff, retry any Exception."""
        return cls.from_config(RuntimeRetryConfig.default(), sleep=sleep)

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        """Single attempt; failures surface immediately."""
        return cls(max_attempts=1)

    @classmethod
    def from_config(
        cls,
        config: RuntimeRetryProtocol,
        *,
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Callable[[int, BaseException], None] | None = None,
    ) -> "RetryPolicy":
        """Build a policy from runtime retry configuration.

        A max_delay of 0.0 means the backoff is uncapped.
        """
        max_delay = config.max_delay if config.max_delay > 0 else None
        retry_on: tuple[type[BaseException], ...] = (RetryableError,) if config.retry_marked_only else (Exception,)
        return cls(
            max_attempts=config.max_attempts,
            backoff=exponential_backoff(config.exponential_base, max_delay),
            retry_on=retry_on,
            sleep=sleep,
            on_retry=on_retry,
        )

    @classmethod
    def from_policy(cls, policy: RetryPolicySpec | None, *, sleep: Callable[[float], None] = time.sleep) -> "RetryPolicy":
        """Build a policy from a partial policy dict.

        Missing keys fall back to POLICY_DEFAULTS; None means a single attempt.

        Raises:
            ValueError: If a field is None, non-numeric, or not finite
        """
        return cls.from_config(RuntimeRetryConfig.from_policy(policy), sleep=sleep)

    @classmethod
    def from_settings(cls, settings: "RetrySettings", *, sleep: Callable[[float], None] = time.sleep) -> "RetryPolicy":
        """Build a policy from the validated RetrySettings model."""
        return cls.from_config(RuntimeRetryConfig.from_settings(settings), sleep=sleep)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def retry_on(self) -> tuple[type[BaseException], ...]:
        return self._retry_on

    def wait_seconds(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return self._backoff(attempt)

    def is_retryable(self, error: BaseException) -> bool:
        """Return True if error matches the filter and is not marked fatal."""
        if isinstance(error, NonRetryableError):
            return False
        return isinstance(error, self._retry_on)

    def execute(self, action: Callable[[], T]) -> T:
        """Run action, retrying failures per this policy.

        Args:
            action: Zero-argument callable

        Returns:
            Whatever action returns on its successful attempt

        Raises:
            BaseException: The last failure, unchanged, once attempts are
                exhausted; or the first non-retryable failure immediately
        """
        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception(self.is_retryable),
            before_sleep=self._before_sleep,
            sleep=self._sleep,
            reraise=True,
        )
        return retrying(action)

    def _wait(self, retry_state: RetryCallState) -> float:
        return self._backoff(retry_state.attempt_number)

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        # before_sleep only fires when a retry will follow, so the outcome is always a failure
        assert retry_state.outcome is not None
        error = retry_state.outcome.exception()
        assert error is not None
        wait_seconds = retry_state.next_action.sleep if retry_state.next_action is not None else 0.0
        logger.warning(
            "retrying_operation",
            attempt=retry_state.attempt_number,
            max_attempts=self._max_attempts,
            wait_seconds=wait_seconds,
            error=repr(error),
        )
        if self._on_retry is not None:
            self._on_retry(retry_state.attempt_number, error)

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._retry_on)
        return f"RetryPolicy(max_attempts={self._max_attempts}, retry_on=({names}))"
