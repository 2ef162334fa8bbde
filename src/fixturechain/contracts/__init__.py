"""Shared contracts for the record-chain engine and its collaborators.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes (RetrySettings, FixtureChainSettings) are NOT re-exported
here - import them from fixturechain.core.config.

Import patterns:
    # Contracts (lightweight, no heavy dependencies)
    from fixturechain.contracts import CreatedRecord, RecordCreator, PreconditionError

    # Settings classes (from core, pulls in pydantic/dynaconf)
    from fixturechain.core.config import FixtureChainSettings, RetrySettings
"""

from fixturechain.contracts.collaborators import (
    BaseValidator,
    CompositeRelatedRecordCreator,
    CreatorResult,
    ExecutableAction,
    PreExecutionAction,
    RecordChain,
    RecordCleanup,
    RecordCreator,
    RecordValidator,
    RelatedRecordCreator,
    RelatedRecordValueCreator,
    WaitableAction,
)
from fixturechain.contracts.engine import RetryPolicySpec
from fixturechain.contracts.enums import EmptyStoreMode, RetryOn
from fixturechain.contracts.errors import (
    CreatorResultError,
    DuplicateRecordIdError,
    EmptyRecordStoreError,
    FixtureChainError,
    NonRetryableError,
    PreconditionError,
    RetryableError,
    RowTypeMismatchError,
    ValidationFailure,
)
from fixturechain.contracts.records import CreatedRecord

__all__ = [
    "BaseValidator",
    "CompositeRelatedRecordCreator",
    "CreatedRecord",
    "CreatorResultError",
    "CreatorResult",
    "DuplicateRecordIdError",
    "EmptyRecordStoreError",
    "EmptyStoreMode",
    "ExecutableAction",
    "FixtureChainError",
    "NonRetryableError",
    "PreExecutionAction",
    "PreconditionError",
    "RecordChain",
    "RecordCleanup",
    "RecordCreator",
    "RecordValidator",
    "RelatedRecordCreator",
    "RelatedRecordValueCreator",
    "RetryOn",
    "RetryPolicySpec",
    "RetryableError",
    "RowTypeMismatchError",
    "ValidationFailure",
    "WaitableAction",
]
