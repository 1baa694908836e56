"""SQLAlchemy implementation for userdir persistence.

Provides:
- DirectoryBase: Declarative base for directory models
- ProfileModel: SQLAlchemy model for user profiles (and salts)
- CredentialModel: SQLAlchemy model for password hashes
- UserDirectorySQLAlchemy: Directory implementation

Examples
--------
directory = UserDirectorySQLAlchemy.from_credentials(
    "localhost", "userdir", "postgres", "secret",
)
directory.add_user("alice", "alice@example.com", "Alice", "s3cret")
"""

from userdir.persistence.sqlalchemy.base import DirectoryBase
from userdir.persistence.sqlalchemy.models import CredentialModel, ProfileModel
from userdir.persistence.sqlalchemy.repositories import UserDirectorySQLAlchemy

__all__ = [
    "CredentialModel",
    "DirectoryBase",
    "ProfileModel",
    "UserDirectorySQLAlchemy",
]
