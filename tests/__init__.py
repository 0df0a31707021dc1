"""Test suite for politeguard.

Unit tests live under tests/unit, grouped by package. They run against
in-memory runtimes from tests/helpers so no model artifact or compute
library is needed.
"""
