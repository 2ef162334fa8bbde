"""Runtime retry configuration contracts.

Settings models (RetrySettings, FixtureChainSettings) are NOT re-exported
here - import them from fixturechain.core.config.
"""

from fixturechain.contracts.config.defaults import POLICY_DEFAULTS
from fixturechain.contracts.config.protocols import RuntimeRetryProtocol
from fixturechain.contracts.config.runtime import RuntimeRetryConfig

__all__ = [
    "POLICY_DEFAULTS",
    "RuntimeRetryConfig",
    "RuntimeRetryProtocol",
]
