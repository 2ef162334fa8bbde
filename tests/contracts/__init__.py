"""Tests for contracts package.

Covers the record value type, the error hierarchy that decides what the
retry policy may retry, runtime retry config, and the collaborator
protocols that fakes in tests/fixtures must satisfy structurally.
"""
