# src/fixturechain/core/config.py
"""
Configuration schema and loading for fixturechain.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from fixturechain.contracts.enums import EmptyStoreMode, RetryOn

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class RetrySettings(BaseModel):
    """Retry behavior configuration.

    Defaults MUST match POLICY_DEFAULTS in fixturechain.contracts.config.defaults.
    """

    model_config = {"frozen": True}

    max_attempts: int = Field(default=5, gt=0, description="Total attempts, including the first")
    exponential_base: float = Field(default=3.0, gt=1.0, description="Wait after attempt n is base ** n seconds")
    max_delay_seconds: float | None = Field(default=None, gt=0, description="Cap on a single backoff wait")
    retry_on: RetryOn = Field(
        default=RetryOn.ALL,
        description="'all' retries any non-fatal Exception, 'marked' only RetryableError",
    )


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        normalized = v.upper()
        if normalized not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level {v!r}, expected one of {sorted(_VALID_LOG_LEVELS)}")
        return normalized


class FixtureChainSettings(BaseModel):
    """Top-level fixturechain configuration.

    Every field has a default, so an empty file yields the historical
    behavior: five attempts, 3**n backoff, silent skip on empty stores.
    """

    model_config = {"frozen": True}

    retry: RetrySettings = Field(default_factory=RetrySettings, description="Retry policy for every chain step")
    logging: LoggingSettings = Field(default_factory=LoggingSettings, description="Logging output")
    empty_store: EmptyStoreMode = Field(
        default=EmptyStoreMode.SKIP,
        description="Related-record creation on an empty store: 'skip' (no-op) or 'raise'",
    )


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values."""

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            default = match.group(2)
            if default is not None:
                return default
            # Left as-is; validation will reject it if the field is typed
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lowercase_keys(value: Any) -> Any:
    """Lowercase dict keys at every level (Dynaconf uppercases env-sourced keys)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> FixtureChainSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FIXTURECHAIN_*) - highest priority
    2. Config file (e.g. fixturechain.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: FIXTURECHAIN_RETRY__MAX_ATTEMPTS for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated FixtureChainSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FIXTURECHAIN",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)

    raw_config = _expand_env_vars(raw_config)

    return FixtureChainSettings(**raw_config)
