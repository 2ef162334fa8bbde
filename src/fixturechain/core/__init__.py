"""Core infrastructure: configuration loading and logging."""

from fixturechain.core.config import (
    FixtureChainSettings,
    LoggingSettings,
    RetrySettings,
    load_settings,
)
from fixturechain.core.logging import configure_from_settings, configure_logging, get_logger

__all__ = [
    "FixtureChainSettings",
    "LoggingSettings",
    "RetrySettings",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
