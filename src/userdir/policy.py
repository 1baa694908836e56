"""Validation policies for user directory fields."""

from abc import ABC, abstractmethod

from userdir.exceptions import PolicyFailure, PolicyFailureError


class Policy(ABC):
    """Decides whether usernames, emails, screen names and passwords are valid.

    A directory holds exactly one policy at a time. Replacing it affects
    subsequent calls only; existing users are not re-validated.
    """

    @abstractmethod
    def check_username(self, username: str) -> bool:
        """Return True if the username is acceptable."""

    @abstractmethod
    def check_email(self, email: str) -> bool:
        """Return True if the email is acceptable."""

    @abstractmethod
    def check_screen_name(self, screen_name: str) -> bool:
        """Return True if the screen name is acceptable."""

    @abstractmethod
    def check_password(self, password: str) -> bool:
        """Return True if the password is acceptable."""


class PermissivePolicy(Policy):
    """Policy that accepts every input."""

    def check_username(self, username: str) -> bool:
        return True

    def check_email(self, email: str) -> bool:
        return True

    def check_screen_name(self, screen_name: str) -> bool:
        return True

    def check_password(self, password: str) -> bool:
        return True


def enforce_policy(
    policy: Policy,
    username: str,
    email: str,
    screen_name: str,
    password: str,
) -> None:
    """Run all four checks in order, stopping at the first failure.

    The order is username, email, screen name, password. It decides which
    field is reported when several are invalid.

    Raises
    ------
    PolicyFailureError
        Tagged with the first field that failed
    """
    checks = (
        (policy.check_username, username, PolicyFailure.USERNAME),
        (policy.check_email, email, PolicyFailure.EMAIL),
        (policy.check_screen_name, screen_name, PolicyFailure.SCREEN_NAME),
        (policy.check_password, password, PolicyFailure.PASSWORD),
    )
    for check, value, failure in checks:
        if not check(value):
            raise PolicyFailureError(failure)
