"""User directory exceptions.

These exceptions are raised by the userdir package and should be
caught and handled by the calling layer (CLI, service code).
"""

from enum import Enum


class PolicyFailure(Enum):
    """Field whose policy check rejected the input."""

    UNDEFINED = "undefined"
    USERNAME = "username"
    EMAIL = "email"
    SCREEN_NAME = "screen_name"
    PASSWORD = "password"


class UserDirectoryError(Exception):
    """Base exception for all user directory errors."""

    def __init__(self, message: str = "User directory error"):
        self.message = message
        super().__init__(self.message)


class ConnectionFailureError(UserDirectoryError):
    """Raised when the storage is unreachable or a statement failed.

    The underlying driver error is chained as ``__cause__``.
    """

    def __init__(self, message: str = "Failed to communicate with the user store"):
        super().__init__(message)


class UserAlreadyExistsError(UserDirectoryError):
    """Raised when adding a user whose username is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User already exists: {username}")


class PolicyFailureError(UserDirectoryError):
    """Raised when a field fails the directory's policy."""

    def __init__(
        self,
        failure: PolicyFailure = PolicyFailure.UNDEFINED,
        message: str | None = None,
    ):
        self.failure = failure
        if message is None:
            message = f"Policy check failed for {failure.value}"
        super().__init__(message)


class UserDoesNotExistError(UserDirectoryError):
    """Raised when a command targets a user that is not in the directory."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User does not exist: {username}")
