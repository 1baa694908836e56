"""userdir - User directory with pluggable storage.

This package manages user accounts (username, email, screen name and a
salted password hash) behind one directory contract. It handles:
- Salt generation and password hashing (SHA3-512)
- Pluggable validation policies
- Directory storage (in memory or SQLAlchemy)

Architecture:
    userdir/
    ├── services/           # Pure logic (salts, password hashing)
    ├── repositories/       # Abstract directory interface
    ├── persistence/        # Implementations by technology
    │   ├── memory/         # Dictionaries owned by the instance
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── cli/                # Typer command-line interface
    ├── policy.py           # Validation policies
    ├── schemas.py          # Data classes
    └── exceptions.py       # Directory exceptions

Usage:
    from userdir import InMemoryUserDirectory, Authentication

    directory = InMemoryUserDirectory()
    directory.add_user("alice", "a@x.com", "Al", "secret")
    directory.authenticate_detailed("alice", "secret")  # AUTHENTICATED
"""

from userdir.exceptions import (
    ConnectionFailureError,
    PolicyFailure,
    PolicyFailureError,
    UserAlreadyExistsError,
    UserDirectoryError,
    UserDoesNotExistError,
)
from userdir.persistence.memory import InMemoryUserDirectory
from userdir.policy import PermissivePolicy, Policy
from userdir.repositories import UserDirectory
from userdir.schemas import Authentication, UserData
from userdir.services import PasswordCryptService

__all__ = [
    # Services
    "PasswordCryptService",
    # Directories
    "UserDirectory",
    "InMemoryUserDirectory",
    # Policies
    "Policy",
    "PermissivePolicy",
    # Schemas
    "Authentication",
    "UserData",
    # Exceptions
    "UserDirectoryError",
    "ConnectionFailureError",
    "UserAlreadyExistsError",
    "PolicyFailure",
    "PolicyFailureError",
    "UserDoesNotExistError",
]
