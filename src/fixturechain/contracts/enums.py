"""Modes shared between settings and the engine."""

from enum import StrEnum


class EmptyStoreMode(StrEnum):
    """What related-record creation does when no records exist yet.

    Values:
        SKIP: Silently do nothing and return the service (historical behavior)
        RAISE: Fail fast with EmptyRecordStoreError
    """

    SKIP = "skip"
    RAISE = "raise"


class RetryOn(StrEnum):
    """Which failures a settings-built retry policy retries.

    Values:
        ALL: Any Exception except NonRetryableError
        MARKED: Only RetryableError subclasses
    """

    ALL = "all"
    MARKED = "marked"
