"""
Pytest fixtures for directory persistence unit tests.

SQL behavior is exercised against a SQLite file per test, so these tests
run without Docker.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import sqlite_url

__all__ = ["sqlite_url"]
