# tests/property/engine/test_record_service_state_machine.py
"""Property-based stateful tests for RecordService chains.

RECORD CHAIN STATE MACHINE:
A service holds an insertion-ordered list of records and an aggregate id.
Rules drive arbitrary sequences of chain operations against the real
service and a plain-list model.

Key Invariants:
1. Record count equals the number of successful creations
2. Records keep creation order; the tail is the last created record
3. Related creators see the tail id (or every id, for composites)
4. Related creation on an empty store is a no-op in skip mode
5. Aggregate assignment moves the aggregate to the tail
"""

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import settings
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from fixturechain.contracts import EmptyRecordStoreError
from fixturechain.engine import RecordService, RetryPolicy
from tests.fixtures.collaborators import (
    ChildCreator,
    CompositeCreator,
    RecordingAction,
    SleepRecorder,
    StaticCreator,
    TransientFailure,
)


class RecordChainStateMachine(RuleBasedStateMachine):
    """Drives RecordService with a list-of-ids model alongside."""

    def __init__(self) -> None:
        super().__init__()
        self.service: RecordService[str] = RecordService("AGG", RetryPolicy(max_attempts=3, sleep=SleepRecorder()))
        self.model_ids: list[str] = []
        self.model_aggregate = "AGG"
        self._next = 0

    def _new_id(self) -> str:
        self._next += 1
        return f"R{self._next}"

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    @rule(failures=st.integers(min_value=0, max_value=2))
    def create_root(self, failures: int) -> None:
        record_id = self._new_id()
        self.service.create_record(StaticCreator(record_id, {"root": True}, failures=failures))
        self.model_ids.append(record_id)

    @rule()
    def create_root_that_never_succeeds(self) -> None:
        with pytest.raises(TransientFailure):
            self.service.create_record(StaticCreator(self._new_id(), None, failures=100))

    @rule()
    def create_child(self) -> None:
        creator = ChildCreator(self._new_id())
        self.service.create_related_record(creator)

        if self.model_ids:
            assert creator.parent_ids == [self.model_ids[-1]]
            self.model_ids.append(creator.record_id)
        else:
            assert creator.parent_ids == []

    @rule()
    def create_composite(self) -> None:
        creator = CompositeCreator(self._new_id())
        self.service.create_related_record_from_all(creator)

        if self.model_ids:
            assert creator.seen == [self.model_ids]
            self.model_ids.append(creator.record_id)
        else:
            assert creator.seen == []

    @rule()
    def assign_aggregate(self) -> None:
        if not self.model_ids:
            with pytest.raises(EmptyRecordStoreError):
                self.service.assign_aggregate_id()
            return
        self.service.assign_aggregate_id()
        self.model_aggregate = self.model_ids[-1]

    @rule()
    def act_on_tail(self) -> None:
        action = RecordingAction()
        if not self.model_ids:
            with pytest.raises(EmptyRecordStoreError):
                self.service.execute_action(action)
            assert action.targets == []
            return
        self.service.execute_action(action)
        assert action.targets == [self.model_ids[-1]]

    # -------------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------------

    @invariant()
    def count_matches_model(self) -> None:
        assert self.service.get_record_count() == len(self.model_ids)

    @invariant()
    def order_matches_model(self) -> None:
        assert list(self.service.records) == self.model_ids

    @invariant()
    def aggregate_matches_model(self) -> None:
        assert self.service.get_aggregate_id() == self.model_aggregate


# Create the test class that pytest will discover
TestRecordChainStateMachine = RecordChainStateMachine.TestCase
TestRecordChainStateMachine.settings = settings(
    max_examples=50,
    stateful_step_count=25,
)
