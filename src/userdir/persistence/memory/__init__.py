"""In-memory persistence for userdir."""

from userdir.persistence.memory.user_directory import InMemoryUserDirectory

__all__ = ["InMemoryUserDirectory"]
