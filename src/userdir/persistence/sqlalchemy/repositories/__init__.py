"""SQLAlchemy directory implementations."""

from userdir.persistence.sqlalchemy.repositories.user_directory import (
    UserDirectorySQLAlchemy,
)

__all__ = ["UserDirectorySQLAlchemy"]
