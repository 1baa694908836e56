"""Directory interfaces for userdir.

This package defines the abstract directory contract that is implemented
by the storage backends under ``userdir.persistence``.
"""

from userdir.repositories.user_directory import UserDirectory

__all__ = ["UserDirectory"]
