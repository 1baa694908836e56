"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    postgres_container,
    postgres_url,
    sqlite_url,
)

__all__ = [
    "postgres_container",
    "postgres_url",
    "sqlite_url",
]
