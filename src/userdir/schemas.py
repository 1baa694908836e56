"""Data classes returned by user directories."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class UserData:
    """Immutable snapshot of a user's profile.

    Directories never hand out their stored instance for mutation; updates
    replace the stored record with a new one.
    """

    username: str
    email: str | None
    screen_name: str


class Authentication(Enum):
    """Outcome of checking a username/password pair."""

    UNKNOWN_USER = "unknown_user"
    WRONG_CREDENTIAL = "wrong_credential"
    AUTHENTICATED = "authenticated"
