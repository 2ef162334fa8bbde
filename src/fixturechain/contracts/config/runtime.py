# src/fixturechain/contracts/config/runtime.py
"""Runtime retry configuration.

RuntimeRetryConfig implements RuntimeRetryProtocol and can be built from the
validated RetrySettings model, from a partial RetryPolicySpec dict, or from
the POLICY_DEFAULTS registry.

Frozen and slotted: runtime config never changes once a chain is running.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fixturechain.contracts.config.defaults import POLICY_DEFAULTS
from fixturechain.contracts.engine import RetryPolicySpec
from fixturechain.contracts.enums import RetryOn

# Settings live in core; import lazily to keep contracts a leaf package.
if TYPE_CHECKING:
    from fixturechain.core.config import RetrySettings


def _merge_policy_with_defaults(policy: RetryPolicySpec) -> dict[str, Any]:
    """Merge policy with defaults; policy values win."""
    return {**POLICY_DEFAULTS, **policy}


def _validate_int_field(field_name: str, value: Any) -> int:
    """Validate and convert a policy field to int.

    Raises:
        ValueError: If value is None, non-numeric, or cannot be converted
    """
    if value is None:
        raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got None")

    # bool is a subclass of int and is never a meaningful attempt count
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid retry policy: {field_name} must be finite, got {value}")
        return int(value)

    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got {value!r}") from None

    raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got {type(value).__name__}")


def _validate_float_field(field_name: str, value: Any) -> float:
    """Validate and convert a policy field to a finite float.

    Raises:
        ValueError: If value is None, non-numeric, or not finite
    """
    if value is None:
        raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got None")

    if isinstance(value, bool):
        raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got bool")

    if isinstance(value, int | float):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value)
        except ValueError:
            raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got {value!r}") from None
    else:
        raise ValueError(f"Invalid retry policy: {field_name} must be numeric, got {type(value).__name__}")

    if not math.isfinite(result):
        raise ValueError(f"Invalid retry policy: {field_name} must be finite, got {value!r}")
    return result


@dataclass(frozen=True, slots=True)
class RuntimeRetryConfig:
    """Runtime configuration for retry behavior.

    Note: max_attempts is the TOTAL number of tries, not the number of retries.
    So max_attempts=5 means: try, then up to four retries.
    """

    max_attempts: int
    exponential_base: float
    max_delay: float = 0.0  # seconds, 0.0 = uncapped
    retry_marked_only: bool = False

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.exponential_base <= 0:
            raise ValueError("exponential_base must be > 0")
        if self.max_delay < 0:
            raise ValueError("max_delay must be >= 0")

    @classmethod
    def default(cls) -> "RuntimeRetryConfig":
        """Factory for the standard retry behavior from POLICY_DEFAULTS."""
        return cls(
            max_attempts=int(POLICY_DEFAULTS["max_attempts"]),
            exponential_base=float(POLICY_DEFAULTS["exponential_base"]),
            max_delay=float(POLICY_DEFAULTS["max_delay"]),
        )

    @classmethod
    def no_retry(cls) -> "RuntimeRetryConfig":
        """Factory for a single-attempt configuration."""
        return cls(
            max_attempts=1,
            exponential_base=float(POLICY_DEFAULTS["exponential_base"]),
            max_delay=float(POLICY_DEFAULTS["max_delay"]),
        )

    @classmethod
    def from_settings(cls, settings: "RetrySettings") -> "RuntimeRetryConfig":
        """Factory from the RetrySettings config model.

        Field Mapping:
            settings.max_attempts -> max_attempts (direct)
            settings.exponential_base -> exponential_base (direct)
            settings.max_delay_seconds -> max_delay (renamed, None -> 0.0)
            settings.retry_on -> retry_marked_only (RetryOn.MARKED -> True)
        """
        return cls(
            max_attempts=settings.max_attempts,
            exponential_base=settings.exponential_base,
            max_delay=settings.max_delay_seconds if settings.max_delay_seconds is not None else 0.0,
            retry_marked_only=settings.retry_on == RetryOn.MARKED,
        )

    @classmethod
    def from_policy(cls, policy: RetryPolicySpec | None) -> "RuntimeRetryConfig":
        """Factory from a partial policy dict.

        Missing fields use POLICY_DEFAULTS. A None policy means the caller
        asked for no policy at all, which maps to a single attempt.

        Out-of-range numbers are clamped to safe minimums; values that are
        not numeric at all raise.

        Raises:
            ValueError: If a field is None, non-numeric, or not finite
        """
        if policy is None:
            return cls.no_retry()

        full = _merge_policy_with_defaults(policy)

        max_attempts = _validate_int_field("max_attempts", full["max_attempts"])
        exponential_base = _validate_float_field("exponential_base", full["exponential_base"])
        max_delay = _validate_float_field("max_delay", full["max_delay"])

        return cls(
            max_attempts=max(1, max_attempts),
            exponential_base=max(1.0, exponential_base),
            max_delay=max(0.0, max_delay),
        )
