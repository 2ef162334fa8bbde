# src/fixturechain/contracts/collaborators.py
"""Collaborator protocols consumed by RecordService.

These protocols define what callers must implement to plug record creation,
validation, cleanup and actions into a chain. They are structural: any
object with the right methods qualifies, no registration or inheritance
needed. RecordService never looks inside the rows they produce.

Collaborator Types:
- RecordCreator: Creates a root record from nothing
- RelatedRecordCreator: Creates a record from the previous record's id
- RelatedRecordValueCreator: Creates a record from the previous record's row
- CompositeRelatedRecordCreator: Creates a record from every id so far
- RecordValidator: Asserts against the aggregate id
- RecordCleanup: Tears down everything created
- ExecutableAction: Side effect against a single record id
- WaitableAction: Blocks (or fails) until a condition holds
- PreExecutionAction: Setup step with no record interaction
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeAlias, TypeVar, runtime_checkable

from fixturechain.contracts.errors import ValidationFailure
from fixturechain.contracts.records import CreatedRecord

if TYPE_CHECKING:
    from fixturechain.engine.retry import RetryPolicy

IdT = TypeVar("IdT")
IdT_contra = TypeVar("IdT_contra", contravariant=True)
ParentT_contra = TypeVar("ParentT_contra", contravariant=True)

# Creators may return a CreatedRecord or a bare (id, row) pair.
CreatorResult: TypeAlias = CreatedRecord[Any] | tuple[Any, Any]


@runtime_checkable
class RecordCreator(Protocol):
    """Creates a record with no input.

    Example:
        class AccountCreator:
            def create_record(self) -> tuple[str, dict[str, Any]]:
                account = api.create_account(name="Contoso")
                return account["id"], account
    """

    def create_record(self) -> CreatorResult:
        """Create the record and return its (id, row)."""
        ...


@runtime_checkable
class RelatedRecordCreator(Protocol[IdT_contra]):
    """Creates a record related to the last created record, given its id."""

    def create_record(self, parent_id: IdT_contra) -> CreatorResult:
        """Create a child of parent_id and return its (id, row)."""
        ...


@runtime_checkable
class RelatedRecordValueCreator(Protocol[ParentT_contra]):
    """Creates a record related to the last created record, given its row.

    parent_type names the row type this creator understands. RecordService
    checks the stored row against it before calling create_record().
    """

    parent_type: type[Any]

    def create_record(self, parent_row: ParentT_contra) -> CreatorResult:
        """Create a child of parent_row and return its (id, row)."""
        ...


@runtime_checkable
class CompositeRelatedRecordCreator(Protocol[IdT_contra]):
    """Creates a record related to every record created so far."""

    def create_record(self, record_ids: list[IdT_contra]) -> CreatorResult:
        """Create a record from the ordered list of all ids and return its (id, row)."""
        ...


@runtime_checkable
class RecordValidator(Protocol[IdT_contra]):
    """Asserts something about the aggregate.

    Signal failure by raising - AssertionError, ValidationFailure or any
    other exception. The failure is retried per the service's policy.
    """

    def validate(self, aggregate_id: IdT_contra) -> None:
        """Raise if the aggregate does not satisfy the assertion."""
        ...


@runtime_checkable
class RecordCleanup(Protocol[IdT]):
    """Tears down the records created during a chain."""

    def cleanup(self, records: dict[IdT, Any], aggregate_id: IdT) -> None:
        """Remove records (an insertion-ordered id -> row mapping)."""
        ...


@runtime_checkable
class ExecutableAction(Protocol[IdT_contra]):
    """Performs a side effect against one record id."""

    def execute(self, record_id: IdT_contra) -> None:
        """Run the action against record_id."""
        ...


@runtime_checkable
class WaitableAction(Protocol):
    """Blocks until a condition is satisfied, raising while it is not."""

    def execute(self) -> None:
        """Check the condition once; raise if it does not hold yet."""
        ...


@runtime_checkable
class PreExecutionAction(Protocol):
    """Setup step with no record store interaction."""

    def execute(self) -> None:
        """Run the setup step."""
        ...


class BaseValidator(ABC, Generic[IdT]):
    """Convenience base for validators.

    Subclasses implement check() and return False (or raise) on failure;
    validate() turns a False result into a ValidationFailure carrying
    describe() so retries log something readable.

    Example:
        class AccountIsActive(BaseValidator[str]):
            def check(self, aggregate_id: str) -> bool:
                return api.get_account(aggregate_id)["status"] == "active"
    """

    @abstractmethod
    def check(self, aggregate_id: IdT) -> bool:
        """Return True when the aggregate satisfies the assertion."""

    def describe(self) -> str:
        """Human-readable name of the assertion for failure messages."""
        return type(self).__name__

    def validate(self, aggregate_id: IdT) -> None:
        if not self.check(aggregate_id):
            raise ValidationFailure(f"{self.describe()} failed for aggregate {aggregate_id!r}")


@runtime_checkable
class RecordChain(Protocol[IdT]):
    """The fluent surface RecordService implements.

    when() builders receive and return a RecordChain, so helpers that
    compose several steps can be typed without importing the engine.
    """

    def create_record(self, creator: RecordCreator) -> "RecordChain[IdT]": ...

    def create_related_record(self, creator: RelatedRecordCreator[IdT]) -> "RecordChain[IdT]": ...

    def create_related_record_from_row(
        self,
        creator: RelatedRecordValueCreator[Any],
        parent_type: type[Any] | None = None,
    ) -> "RecordChain[IdT]": ...

    def create_related_record_from_all(self, creator: CompositeRelatedRecordCreator[IdT]) -> "RecordChain[IdT]": ...

    def assert_against(self, validator: RecordValidator[IdT]) -> "RecordChain[IdT]": ...

    def when(self, condition: bool, builder: Callable[["RecordChain[IdT]"], "RecordChain[IdT]"]) -> "RecordChain[IdT]": ...

    def cleanup(self, cleanup: RecordCleanup[IdT]) -> None: ...

    def execute_action(self, action: ExecutableAction[IdT], *, execute_against_aggregate: bool = False) -> "RecordChain[IdT]": ...

    def wait_for(self, action: WaitableAction, policy: "RetryPolicy | None" = None) -> "RecordChain[IdT]": ...

    def assign_aggregate_id(self) -> "RecordChain[IdT]": ...

    def pre_execution_action(self, action: PreExecutionAction) -> "RecordChain[IdT]": ...

    def get_aggregate_id(self) -> IdT: ...

    def get_record_count(self) -> int: ...
