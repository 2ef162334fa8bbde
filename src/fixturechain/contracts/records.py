# src/fixturechain/contracts/records.py
"""Record types shared between the engine and collaborators."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fixturechain.contracts.errors import CreatorResultError, RowTypeMismatchError

IdT = TypeVar("IdT")
ParentT = TypeVar("ParentT")


@dataclass(frozen=True, slots=True)
class CreatedRecord(Generic[IdT]):
    """A record produced by a creator: its id plus an opaque row payload.

    Rows are stored untyped because a single chain mixes records of
    different kinds. Use row_as() to get a typed view back.
    """

    id: IdT
    row: Any

    @classmethod
    def coerce(cls, result: "CreatedRecord[IdT] | tuple[IdT, Any]") -> "CreatedRecord[IdT]":
        """Normalise a creator result into a CreatedRecord.

        Creators may return a CreatedRecord or a plain ``(id, row)`` pair.

        Raises:
            CreatorResultError: If result is neither form
        """
        if isinstance(result, CreatedRecord):
            return result
        if isinstance(result, tuple) and len(result) == 2:
            return cls(id=result[0], row=result[1])
        raise CreatorResultError(f"Creator must return CreatedRecord or (id, row) tuple, got {type(result).__name__}")

    def row_as(self, parent_type: type[ParentT]) -> ParentT:
        """Return the row typed as parent_type.

        Raises:
            RowTypeMismatchError: If the row is not an instance of parent_type
        """
        if not isinstance(self.row, parent_type):
            raise RowTypeMismatchError(expected=parent_type, actual=type(self.row), record_id=self.id)
        return self.row
