# src/fixturechain/engine/service.py
"""RecordService: fluent record-chain orchestration.

Tracks every record created during a test scenario, lets each new record be
derived from the last one, and runs every collaborator call through the
service's RetryPolicy.

Precondition checks (records required, aggregate assignment) run before the
policy is entered, so ordering mistakes fail immediately instead of being
retried.
"""

from __future__ import annotations

__all__ = ["RecordService"]

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fixturechain.contracts.enums import EmptyStoreMode
from fixturechain.contracts.errors import EmptyRecordStoreError
from fixturechain.contracts.records import CreatedRecord
from fixturechain.core.logging import get_logger
from fixturechain.engine.retry import RetryPolicy
from fixturechain.engine.store import RecordStore

if TYPE_CHECKING:
    from fixturechain.contracts.collaborators import (
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
    from fixturechain.core.config import FixtureChainSettings

IdT = TypeVar("IdT")

logger = get_logger(__name__)


class RecordService(Generic[IdT]):
    """Fluent record service tracking all records created in a test session.

    Every chaining method returns the service itself; cleanup() is terminal.
    A failure that survives the retry policy propagates to the caller and
    ends the chain there.

    Example:
        service = RecordService("A1")
        (
            service.create_record(AccountCreator())
            .create_related_record(ContactCreator())
            .assign_aggregate_id()
            .assert_against(ContactIsLinked())
            .cleanup(DeleteAll())
        )
    """

    def __init__(
        self,
        aggregate_id: IdT,
        policy: RetryPolicy | None = None,
        *,
        empty_store: EmptyStoreMode = EmptyStoreMode.SKIP,
    ) -> None:
        """Initialize the service.

        Args:
            aggregate_id: Primary entity id, target of assertions and cleanup
            policy: Retry policy for every wrapped step (default: RetryPolicy.default())
            empty_store: What related-record creation does before any record exists
        """
        self._store: RecordStore[IdT] = RecordStore()
        self._aggregate_id = aggregate_id
        self._policy = policy if policy is not None else RetryPolicy.default()
        self._empty_store = EmptyStoreMode(empty_store)

    @classmethod
    def from_settings(
        cls,
        aggregate_id: IdT,
        settings: FixtureChainSettings,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> RecordService[IdT]:
        """Build a service whose policy and empty-store mode come from settings."""
        policy = RetryPolicy.from_settings(settings.retry, sleep=sleep)
        return cls(aggregate_id, policy, empty_store=settings.empty_store)

    # === Record creation ===

    def create_record(self, creator: RecordCreator) -> RecordService[IdT]:
        """Create a root record and remember it as the new tail of the chain."""

        def step() -> None:
            self._insert(creator.create_record(), creator)

        self._policy.execute(step)
        return self

    def create_related_record(self, creator: RelatedRecordCreator[IdT]) -> RecordService[IdT]:
        """Create a record from the id of the last created record."""
        if not self._has_parent("create_related_record"):
            return self

        def step() -> None:
            parent_id = self._store.last().id
            self._insert(creator.create_record(parent_id), creator)

        self._policy.execute(step)
        return self

    def create_related_record_from_row(
        self,
        creator: RelatedRecordValueCreator[Any],
        parent_type: type[Any] | None = None,
    ) -> RecordService[IdT]:
        """Create a record from the row of the last created record.

        Args:
            creator: Value-based related creator
            parent_type: Row type the creator expects (default: creator.parent_type)

        Raises:
            RowTypeMismatchError: If the last row is not a parent_type (not retried)
        """
        if not self._has_parent("create_related_record_from_row"):
            return self

        expected = parent_type if parent_type is not None else getattr(creator, "parent_type", None)
        if expected is None:
            raise TypeError(f"{type(creator).__name__} declares no parent_type and none was passed")

        def step() -> None:
            parent_row = self._store.last().row_as(expected)
            self._insert(creator.create_record(parent_row), creator)

        self._policy.execute(step)
        return self

    def create_related_record_from_all(self, creator: CompositeRelatedRecordCreator[IdT]) -> RecordService[IdT]:
        """Create a record from the ordered ids of every record created so far."""
        if not self._has_parent("create_related_record_from_all"):
            return self

        def step() -> None:
            self._insert(creator.create_record(self._store.keys()), creator)

        self._policy.execute(step)
        return self

    # === Verification and actions ===

    def assert_against(self, validator: RecordValidator[IdT]) -> RecordService[IdT]:
        """Validate the aggregate, retrying while the backing system catches up.

        A validator that can never pass is still retried until the policy
        gives up.
        """
        self._policy.execute(lambda: validator.validate(self._aggregate_id))
        return self

    def when(
        self,
        condition: bool,
        builder: Callable[[RecordChain[IdT]], RecordChain[IdT]],
    ) -> RecordService[IdT]:
        """Run builder against this service only if condition holds.

        The builder's return value is ignored and this service is always
        returned. The builder runs inside the retry policy, so a failed
        builder is re-run from the start; steps it completed before failing
        are not undone.
        """
        if condition:
            self._policy.execute(lambda: builder(self))
        else:
            logger.debug("conditional_step_skipped", aggregate_id=self._aggregate_id)
        return self

    def execute_action(
        self,
        action: ExecutableAction[IdT],
        *,
        execute_against_aggregate: bool = False,
    ) -> RecordService[IdT]:
        """Run an action against the aggregate or against the last created record.

        Raises:
            EmptyRecordStoreError: If targeting the last record and none exist
        """
        if execute_against_aggregate:
            self._policy.execute(lambda: action.execute(self._aggregate_id))
            return self

        if not self._store.any():
            raise EmptyRecordStoreError("You must create records before executing an action against them")
        self._policy.execute(lambda: action.execute(self._store.last().id))
        return self

    def wait_for(self, action: WaitableAction, policy: RetryPolicy | None = None) -> RecordService[IdT]:
        """Block until action stops raising.

        Args:
            action: Condition check that raises while the condition is unmet
            policy: Per-call override, e.g. a longer wait for a slow async job
        """
        effective = policy if policy is not None else self._policy
        effective.execute(action.execute)
        return self

    def pre_execution_action(self, action: PreExecutionAction) -> RecordService[IdT]:
        """Run a setup step that does not touch the record store."""
        self._policy.execute(action.execute)
        return self

    def assign_aggregate_id(self) -> RecordService[IdT]:
        """Make the last created record the aggregate.

        Raises:
            EmptyRecordStoreError: If no records exist yet
        """
        if not self._store.any():
            raise EmptyRecordStoreError("You must first create records before assigning an aggregate")
        previous = self._aggregate_id
        self._aggregate_id = self._store.last().id
        logger.info("aggregate_id_assigned", previous=previous, aggregate_id=self._aggregate_id)
        return self

    # === Terminal ===

    def cleanup(self, cleanup: RecordCleanup[IdT]) -> None:
        """Hand every created record and the aggregate id to a cleanup collaborator.

        The service stays usable afterwards; records are not forgotten.
        """

        def step() -> None:
            cleanup.cleanup(self._store.as_dict(), self._aggregate_id)

        self._policy.execute(step)
        logger.info("records_cleaned_up", aggregate_id=self._aggregate_id, count=self._store.count())

    # === Accessors ===

    def get_aggregate_id(self) -> IdT:
        return self._aggregate_id

    def get_record_count(self) -> int:
        return self._store.count()

    @property
    def aggregate_id(self) -> IdT:
        return self._aggregate_id

    @property
    def record_count(self) -> int:
        return self._store.count()

    @property
    def records(self) -> dict[IdT, Any]:
        """Insertion-ordered copy of id -> row for everything created so far."""
        return self._store.as_dict()

    @property
    def last_record(self) -> CreatedRecord[IdT]:
        """The tail of the chain.

        Raises:
            EmptyRecordStoreError: If no records exist yet
        """
        return self._store.last()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def empty_store_mode(self) -> EmptyStoreMode:
        return self._empty_store

    # === Internals ===

    def _has_parent(self, operation: str) -> bool:
        """Apply the empty-store mode before a related-record step.

        Returns:
            True if a parent record exists; False if the step should be skipped

        Raises:
            EmptyRecordStoreError: If the store is empty and the mode is RAISE
        """
        if self._store.any():
            return True
        if self._empty_store == EmptyStoreMode.RAISE:
            raise EmptyRecordStoreError(f"You must create a record before calling {operation}")
        logger.debug(
            "related_record_skipped",
            operation=operation,
            aggregate_id=self._aggregate_id,
            reason="no records created yet",
        )
        return False

    def _insert(self, result: CreatorResult, creator: object) -> None:
        record = CreatedRecord.coerce(result)
        self._store.insert(record.id, record.row)
        logger.debug(
            "record_created",
            record_id=record.id,
            aggregate_id=self._aggregate_id,
            creator=type(creator).__name__,
            count=self._store.count(),
        )

    def __repr__(self) -> str:
        return f"RecordService(aggregate_id={self._aggregate_id!r}, records={self._store.count()}, policy={self._policy!r})"
