# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Record ids (hashable, the shapes real backends hand out)
- Rows (arbitrary payloads, including None)
- Retry configuration ranges

Usage:
    from tests.property.conftest import record_ids, rows

    @given(ids=unique_record_ids)
    def test_store_keeps_order(ids: list[str]) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, STATE_MACHINE_SETTINGS
#
# Tiers: STATE_MACHINE (200), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

from hypothesis import strategies as st

# =============================================================================
# Record Strategies
# =============================================================================

# Ids are whatever the backend returns: GUID-like strings or integer keys
record_ids = st.text(min_size=1, max_size=20) | st.integers()

# Distinct ids in creation order
unique_record_ids = st.lists(record_ids, min_size=1, max_size=30, unique=True)

# Rows are opaque to the store
rows = (
    st.none()
    | st.booleans()
    | st.integers()
    | st.text(max_size=50)
    | st.dictionaries(st.text(max_size=10), st.integers(), max_size=5)
)


# =============================================================================
# Retry Strategies
# =============================================================================

valid_max_attempts = st.integers(min_value=1, max_value=20)

valid_bases = st.floats(min_value=1.01, max_value=10.0, allow_nan=False, allow_infinity=False)

valid_delays = st.floats(min_value=0.001, max_value=3600.0, allow_nan=False, allow_infinity=False)
