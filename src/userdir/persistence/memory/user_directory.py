"""In-memory implementation of UserDirectory."""

import itertools
import logging
import threading
from dataclasses import dataclass, replace

from userdir.exceptions import UserAlreadyExistsError
from userdir.policy import Policy, enforce_policy
from userdir.repositories import UserDirectory
from userdir.schemas import Authentication, UserData
from userdir.services import PasswordCryptService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    """Profile and credential of one user, always stored together."""

    data: UserData
    salt: str
    hashed_value: str


class InMemoryUserDirectory(UserDirectory):
    """
    UserDirectory backed by dictionaries owned by the instance.

    Each user gets a surrogate id when added. The username index points at
    that id, so a rename only re-points the index and never moves the
    credential. A re-entrant lock makes every operation a single critical
    section.
    """

    def __init__(
        self,
        policy: Policy | None = None,
        crypt: PasswordCryptService | None = None,
    ) -> None:
        super().__init__(policy)
        self._crypt = crypt or PasswordCryptService()
        self._lock = threading.RLock()
        self._ids: dict[str, int] = {}
        self._entries: dict[int, _Entry] = {}
        self._next_id = itertools.count(1)

    def has_user(self, username: str) -> bool:
        with self._lock:
            return username in self._ids

    def add_user(
        self,
        username: str,
        email: str,
        screen_name: str,
        password: str,
    ) -> None:
        with self._lock:
            if username in self._ids:
                raise UserAlreadyExistsError(username)
            enforce_policy(self._policy, username, email, screen_name, password)

            salt = self._crypt.next_salt()
            entry = _Entry(
                data=UserData(username=username, email=email, screen_name=screen_name),
                salt=salt,
                hashed_value=self._crypt.hash_password(password, salt),
            )
            user_id = next(self._next_id)
            self._entries[user_id] = entry
            self._ids[username] = user_id
            logger.info("Created user: %s", username)

    def remove_user(self, username: str) -> bool:
        with self._lock:
            user_id = self._ids.pop(username, None)
            if user_id is None:
                return False
            del self._entries[user_id]
            logger.info("Deleted user: %s", username)
            return True

    def list_users(self) -> list[str]:
        with self._lock:
            return list(self._ids)

    def authenticate_detailed(self, username: str, password: str) -> Authentication:
        with self._lock:
            entry = self._find_entry(username)
            if entry is None:
                return Authentication.UNKNOWN_USER
            if self._crypt.verify(password, entry.salt, entry.hashed_value):
                return Authentication.AUTHENTICATED
            return Authentication.WRONG_CREDENTIAL

    def get_user_data(self, username: str) -> UserData | None:
        with self._lock:
            entry = self._find_entry(username)
            return entry.data if entry else None

    def update_username(self, username: str, new_username: str) -> None:
        # new_username is not checked for uniqueness; an existing user with
        # that name is replaced, profile and credential together
        with self._lock:
            user_id = self._ids.pop(username, None)
            if user_id is None:
                return
            displaced = self._ids.get(new_username)
            if displaced is not None and displaced != user_id:
                del self._entries[displaced]
                logger.info("Deleted user displaced by rename: %s", new_username)
            entry = self._entries[user_id]
            self._entries[user_id] = replace(
                entry,
                data=replace(entry.data, username=new_username),
            )
            self._ids[new_username] = user_id
            logger.debug("Renamed user: %s -> %s", username, new_username)

    def update_email(self, username: str, new_email: str) -> None:
        with self._lock:
            self._replace_data(username, email=new_email)

    def update_screen_name(self, username: str, new_screen_name: str) -> None:
        with self._lock:
            self._replace_data(username, screen_name=new_screen_name)

    def update_password(self, username: str, new_password: str) -> None:
        with self._lock:
            user_id = self._ids.get(username)
            if user_id is None:
                return
            salt = self._crypt.next_salt()
            self._entries[user_id] = replace(
                self._entries[user_id],
                salt=salt,
                hashed_value=self._crypt.hash_password(new_password, salt),
            )
            logger.debug("Updated password for user: %s", username)

    def _find_entry(self, username: str) -> _Entry | None:
        user_id = self._ids.get(username)
        return self._entries[user_id] if user_id is not None else None

    def _replace_data(self, username: str, **changes: str) -> None:
        user_id = self._ids.get(username)
        if user_id is None:
            return
        entry = self._entries[user_id]
        self._entries[user_id] = replace(entry, data=replace(entry.data, **changes))
        logger.debug("Updated %s for user: %s", ", ".join(changes), username)
