# tests/property/engine/test_store_properties.py
"""Property-based tests for RecordStore ordering and uniqueness."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fixturechain.contracts import DuplicateRecordIdError
from fixturechain.engine.store import RecordStore
from tests.property.conftest import rows, unique_record_ids
from tests.property.settings import STANDARD_SETTINGS


class TestRecordStoreProperties:
    @given(ids=unique_record_ids, data=st.data())
    @STANDARD_SETTINGS
    def test_keys_follow_insertion_order(self, ids: list[Any], data: st.DataObject) -> None:
        """Property: keys() is exactly the insertion sequence."""
        store: RecordStore[Any] = RecordStore()
        payloads = [data.draw(rows) for _ in ids]

        for record_id, row in zip(ids, payloads, strict=True):
            store.insert(record_id, row)

        assert store.keys() == ids
        assert list(store.as_dict().items()) == list(zip(ids, payloads, strict=True))

    @given(ids=unique_record_ids)
    @STANDARD_SETTINGS
    def test_last_is_most_recent_insert(self, ids: list[Any]) -> None:
        """Property: after every insert, last() is the record just inserted."""
        store: RecordStore[Any] = RecordStore()

        for count, record_id in enumerate(ids, start=1):
            store.insert(record_id, count)
            assert store.last().id == record_id
            assert store.count() == count

    @given(ids=unique_record_ids, data=st.data())
    @STANDARD_SETTINGS
    def test_duplicate_insert_leaves_store_unchanged(self, ids: list[Any], data: st.DataObject) -> None:
        """Property: re-inserting any existing id fails and changes nothing."""
        store: RecordStore[Any] = RecordStore()
        for record_id in ids:
            store.insert(record_id, None)
        duplicate = data.draw(st.sampled_from(ids))

        with pytest.raises(DuplicateRecordIdError):
            store.insert(duplicate, "replacement")

        assert store.keys() == ids
        assert store.last().id == ids[-1]
        assert store.get(duplicate).row is None
