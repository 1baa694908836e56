"""Abstract user directory interface.

This interface defines the contract every directory backend implements.
Implementations can keep users in memory, in a relational database, or
any other storage.
"""

from abc import ABC, abstractmethod

from userdir.policy import PermissivePolicy, Policy
from userdir.schemas import Authentication, UserData


class UserDirectory(ABC):
    """
    Abstract directory of users and their credentials.

    Implementations must provide methods for:
    - Adding, removing and listing users
    - Authenticating a username/password pair
    - Reading and updating profile data and passwords

    Update methods are silent no-ops for usernames that are not in the
    directory. Passwords are stored as salted hashes only.

    Example implementation:
        class UserDirectorySQLAlchemy(UserDirectory):
            def __init__(self, host, database, user, password):
                super().__init__()
                ...

            def has_user(self, username: str) -> bool:
                # SQLAlchemy-specific implementation
                ...
    """

    def __init__(self, policy: Policy | None = None):
        """Initialize the directory with its active policy.

        Parameters
        ----------
        policy
            Policy used to validate new users. Defaults to a policy that
            accepts everything.
        """
        self._policy = policy or PermissivePolicy()

    def get_policy(self) -> Policy:
        """Return the active policy."""
        return self._policy

    def set_policy(self, policy: Policy) -> None:
        """Replace the active policy for all subsequent calls."""
        self._policy = policy

    def authenticate(self, username: str, password: str) -> bool:
        """Return True only if the username exists and the password matches."""
        return (
            self.authenticate_detailed(username, password)
            is Authentication.AUTHENTICATED
        )

    @abstractmethod
    def has_user(self, username: str) -> bool:
        """
        Check whether a user exists.

        Parameters
        ----------
        username
            The username to look up

        Returns
        -------
        True if the user is in the directory, False otherwise
        """

    @abstractmethod
    def add_user(
        self,
        username: str,
        email: str,
        screen_name: str,
        password: str,
    ) -> None:
        """
        Add a user with a freshly salted password hash.

        Parameters
        ----------
        username
            Unique username of the new user
        email
            Email of the new user
        screen_name
            Display name of the new user
        password
            Plaintext password, hashed before it is stored

        Raises
        ------
        UserAlreadyExistsError
            If the username is taken
        PolicyFailureError
            If a field fails the active policy
        """

    @abstractmethod
    def remove_user(self, username: str) -> bool:
        """
        Remove a user together with its credential.

        Parameters
        ----------
        username
            The username to remove

        Returns
        -------
        True if removed, False if the user did not exist
        """

    @abstractmethod
    def list_users(self) -> list[str]:
        """Return the usernames of all users, in no particular order."""

    @abstractmethod
    def authenticate_detailed(self, username: str, password: str) -> Authentication:
        """
        Check a username/password pair.

        Parameters
        ----------
        username
            The username to authenticate
        password
            The plaintext password supplied by the caller

        Returns
        -------
        UNKNOWN_USER if there is no such user, WRONG_CREDENTIAL if the
        password does not match, AUTHENTICATED otherwise
        """

    @abstractmethod
    def get_user_data(self, username: str) -> UserData | None:
        """
        Fetch a user's profile.

        Parameters
        ----------
        username
            The username to look up

        Returns
        -------
        The user's data if found, None otherwise
        """

    @abstractmethod
    def update_username(self, username: str, new_username: str) -> None:
        """Rename a user, keeping its profile and credential."""

    @abstractmethod
    def update_email(self, username: str, new_email: str) -> None:
        """Replace a user's email."""

    @abstractmethod
    def update_screen_name(self, username: str, new_screen_name: str) -> None:
        """Replace a user's screen name."""

    @abstractmethod
    def update_password(self, username: str, new_password: str) -> None:
        """Replace a user's password, generating a new salt."""
