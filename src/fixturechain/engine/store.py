# src/fixturechain/engine/store.py
"""RecordStore: append-only, insertion-ordered record storage.

Order is kept in an explicit list rather than relying on mapping iteration
order; a separate id index enforces uniqueness. "Last" always means the most
recently inserted record, never the largest key.
"""

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from fixturechain.contracts.errors import DuplicateRecordIdError, EmptyRecordStoreError
from fixturechain.contracts.records import CreatedRecord

IdT = TypeVar("IdT")


class RecordStore(Generic[IdT]):
    """In-memory record store owned by a single RecordService.

    Not thread-safe. Records are never removed.
    """

    def __init__(self) -> None:
        self._records: list[CreatedRecord[IdT]] = []
        self._index: dict[IdT, int] = {}

    def insert(self, record_id: IdT, row: Any) -> CreatedRecord[IdT]:
        """Append a record.

        Raises:
            DuplicateRecordIdError: If record_id is already stored
        """
        if record_id in self._index:
            raise DuplicateRecordIdError(record_id)
        record = CreatedRecord(id=record_id, row=row)
        self._index[record_id] = len(self._records)
        self._records.append(record)
        return record

    def any(self) -> bool:
        return bool(self._records)

    def last(self) -> CreatedRecord[IdT]:
        """Return the most recently inserted record.

        Raises:
            EmptyRecordStoreError: If nothing has been inserted
        """
        if not self._records:
            raise EmptyRecordStoreError()
        return self._records[-1]

    def keys(self) -> list[IdT]:
        """Ids in insertion order (a copy)."""
        return [record.id for record in self._records]

    def count(self) -> int:
        return len(self._records)

    def get(self, record_id: IdT) -> CreatedRecord[IdT]:
        """Look up a record by id.

        Raises:
            KeyError: If record_id was never inserted
        """
        return self._records[self._index[record_id]]

    def as_dict(self) -> dict[IdT, Any]:
        """Insertion-ordered id -> row copy."""
        return {record.id: record.row for record in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CreatedRecord[IdT]]:
        return iter(list(self._records))

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._index

    def __repr__(self) -> str:
        return f"RecordStore(count={len(self._records)})"
