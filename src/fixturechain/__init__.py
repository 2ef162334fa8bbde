"""
fixturechain: Fluent, retry-aware construction of chained test-fixture records.

A small engine for building related records during a test run, wrapping each
step in a uniform retry policy, and handing everything created to a cleanup
collaborator at the end of the scenario.
"""

__version__ = "0.1.0"
