"""Shared fakes for the unit test suite."""

__all__ = ["fakes"]
