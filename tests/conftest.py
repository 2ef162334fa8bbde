# tests/conftest.py
"""Shared test fixtures and helpers.

Retry policies in tests never sleep: the sleep_recorder fixture is injected
as the policy's sleep callable and records the requested waits instead.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from fixturechain.engine import RecordService, RetryPolicy
from tests.fixtures.collaborators import SleepRecorder

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on shared runners
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    """Stand-in for time.sleep that records requested waits."""
    return SleepRecorder()


@pytest.fixture
def default_policy(sleep_recorder: SleepRecorder) -> RetryPolicy:
    """The default 5-attempt, 3 ** n policy, without real waiting."""
    return RetryPolicy.default(sleep=sleep_recorder)


@pytest.fixture
def service(default_policy: RetryPolicy) -> RecordService[str]:
    """A fresh service with aggregate id "A1" and the non-sleeping default policy."""
    return RecordService("A1", default_policy)
