# src/fixturechain/contracts/errors.py
"""Exception hierarchy for record chains.

Two families matter to the retry policy:

- NonRetryableError and its subclasses describe ordering or programming
  mistakes (no records yet, duplicate ids, wrong row type). Retrying cannot
  fix them, so RetryPolicy lets them through on the first attempt.
- Everything else, including ValidationFailure and RetryableError, is treated
  as a possibly transient fault and retried per the policy's filter.
"""

from typing import Any


class FixtureChainError(Exception):
    """Base class for all fixturechain errors."""


class NonRetryableError(FixtureChainError):
    """Marker for failures the retry policy must never retry."""


class PreconditionError(NonRetryableError):
    """Raised when an operation is called before its preconditions hold."""


class EmptyRecordStoreError(PreconditionError):
    """Raised when an operation needs at least one created record."""

    def __init__(self, message: str = "No records have been created yet") -> None:
        super().__init__(message)


class DuplicateRecordIdError(PreconditionError):
    """Raised when a creator returns an id that is already stored.

    Attributes:
        record_id: The id that was already present
    """

    def __init__(self, record_id: Any) -> None:
        self.record_id = record_id
        super().__init__(f"Record id {record_id!r} has already been created")


class RowTypeMismatchError(NonRetryableError, TypeError):
    """Raised when the last stored row is not of the type a creator expects.

    Attributes:
        expected: Type requested by the caller
        actual: Concrete type of the stored row
        record_id: Id of the record whose row was inspected
    """

    def __init__(self, expected: type[Any], actual: type[Any], record_id: Any) -> None:
        self.expected = expected
        self.actual = actual
        self.record_id = record_id
        super().__init__(f"Record {record_id!r} holds a {actual.__name__}, expected {expected.__name__}")


class CreatorResultError(NonRetryableError, TypeError):
    """Raised when a creator returns something other than a record or (id, row) pair."""


class RetryableError(FixtureChainError):
    """Explicit marker for transient failures.

    Collaborators raise this (or a subclass) when a policy built with
    ``retry_on="marked"`` should retry the failure.
    """


class ValidationFailure(FixtureChainError, AssertionError):
    """Raised by validators when an assertion against the aggregate fails.

    Subclasses AssertionError so plain ``assert`` based validators and
    explicit ValidationFailure raises are handled alike.
    """
