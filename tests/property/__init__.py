# tests/property/__init__.py
"""Property-based tests for fixturechain.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- engine/: retry attempt counting, store ordering, record chain state machine
"""
