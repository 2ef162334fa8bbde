# tests/fixtures/__init__.py
"""Shared fakes for fixturechain tests."""
