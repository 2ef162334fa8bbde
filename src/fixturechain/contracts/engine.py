"""Engine-facing policy schemas."""

from typing import TypedDict


class RetryPolicySpec(TypedDict, total=False):
    """Schema for partial retry overrides supplied as plain dicts.

    All fields are optional - RuntimeRetryConfig.from_policy() applies defaults.

    Attributes:
        max_attempts: Maximum number of attempts (minimum 1)
        exponential_base: Backoff base, wait after attempt n is base ** n seconds
        max_delay: Cap on a single wait in seconds (0 for uncapped)
    """

    max_attempts: int
    exponential_base: float
    max_delay: float
