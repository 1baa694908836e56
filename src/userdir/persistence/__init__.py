"""Persistence implementations for userdir.

This package contains storage-specific implementations of the
directory interface defined in userdir.repositories.

Structure:
    persistence/
    ├── memory/         # Dictionaries owned by the directory instance
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation

Usage:
    from userdir.persistence.memory import InMemoryUserDirectory
    from userdir.persistence.sqlalchemy import UserDirectorySQLAlchemy
"""
