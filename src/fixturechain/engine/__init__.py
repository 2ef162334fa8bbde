"""Record-chain engine.

This module provides the execution engine for fixture chains:
- RecordService: Fluent chaining API over an ordered record store
- RecordStore: Append-only, insertion-ordered record storage
- RetryPolicy: Retry logic with tenacity

Example:
    from fixturechain.engine import RecordService, RetryPolicy

    service = RecordService("A1", RetryPolicy(max_attempts=3))
    service.create_record(AccountCreator()).create_related_record(ContactCreator())
"""

from fixturechain.engine.retry import Backoff, RetryPolicy, exponential_backoff
from fixturechain.engine.service import RecordService
from fixturechain.engine.store import RecordStore

__all__ = [
    "Backoff",
    "RecordService",
    "RecordStore",
    "RetryPolicy",
    "exponential_backoff",
]
