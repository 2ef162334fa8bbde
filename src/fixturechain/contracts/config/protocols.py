# src/fixturechain/contracts/config/protocols.py
"""Runtime protocol for Settings -> RetryPolicy enforcement.

RetryPolicy.from_config() accepts the protocol rather than the concrete
RuntimeRetryConfig, so any object exposing these fields can drive a policy.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RuntimeRetryProtocol(Protocol):
    """What RetryPolicy expects from retry configuration.

    Fields come from RetrySettings:
    - max_attempts: RetrySettings.max_attempts (direct)
    - exponential_base: RetrySettings.exponential_base (direct)
    - max_delay: RetrySettings.max_delay_seconds (renamed, None -> 0.0)
    - retry_marked_only: RetrySettings.retry_on == "marked"
    """

    @property
    def max_attempts(self) -> int:
        """Maximum number of attempts (includes initial try)."""
        ...

    @property
    def exponential_base(self) -> float:
        """Backoff base; the wait after attempt n is base ** n seconds."""
        ...

    @property
    def max_delay(self) -> float:
        """Cap on a single wait in seconds, 0.0 for no cap."""
        ...

    @property
    def retry_marked_only(self) -> bool:
        """Retry only RetryableError subclasses instead of every Exception."""
        ...
