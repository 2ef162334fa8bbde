# src/fixturechain/contracts/config/defaults.py
"""Default value registry for retry configuration.

POLICY_DEFAULTS fills in fields missing from a partial RetryPolicySpec dict
and backs RuntimeRetryConfig.default(). Settings defaults in
fixturechain.core.config MUST match these values.
"""

from typing import Final

# Five total attempts, waiting 3**attempt seconds between them (3, 9, 27, 81).
# max_delay of 0.0 means "uncapped".
POLICY_DEFAULTS: Final[dict[str, int | float]] = {
    "max_attempts": 5,
    "exponential_base": 3.0,
    "max_delay": 0.0,
}
