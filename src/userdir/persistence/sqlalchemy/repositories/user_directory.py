"""SQLAlchemy implementation of UserDirectory.

Stores profiles and credentials in two tables linked by the profile's
surrogate id. Every call opens its own connection and releases it before
returning. Multi-statement writes run in a single transaction that is
committed on success and rolled back on any error.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import URL, delete, event, func, inspect, select, update
from sqlalchemy.engine import Engine, create_engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from userdir.exceptions import ConnectionFailureError, UserAlreadyExistsError
from userdir.persistence.sqlalchemy.base import DirectoryBase
from userdir.persistence.sqlalchemy.models import CredentialModel, ProfileModel
from userdir.policy import Policy, enforce_policy
from userdir.repositories import UserDirectory
from userdir.schemas import Authentication, UserData
from userdir.services import PasswordCryptService

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "postgresql+psycopg2"


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class UserDirectorySQLAlchemy(UserDirectory):
    """
    SQLAlchemy implementation of UserDirectory.

    The engine uses ``NullPool``, so no connection outlives the call that
    opened it. Tables are created at construction if the profiles table
    does not exist yet.
    """

    def __init__(
        self,
        url: str | URL,
        policy: Policy | None = None,
        crypt: PasswordCryptService | None = None,
    ) -> None:
        """Initialize the directory and create its tables if needed.

        Parameters
        ----------
        url
            SQLAlchemy database URL
        policy
            Policy used to validate new users
        crypt
            Salt and hash service, mainly for tests

        Raises
        ------
        ConnectionFailureError
            If the database cannot be reached or the tables cannot be created
        """
        super().__init__(policy)
        self._crypt = crypt or PasswordCryptService()
        self._url = make_url(url)
        self._engine = self._create_engine(self._url)
        self._session_maker = sessionmaker(self._engine, expire_on_commit=False)
        self._ensure_tables()

    @classmethod
    def from_credentials(
        cls,
        host: str,
        database: str,
        user: str,
        password: str,
        policy: Policy | None = None,
        *,
        port: int | None = None,
        drivername: str = DEFAULT_DRIVER,
    ) -> "UserDirectorySQLAlchemy":
        """Create a directory for a PostgreSQL database.

        Parameters
        ----------
        host
            Database server host name
        database
            Name of the database holding the directory tables
        user
            Database login
        password
            Database password
        policy
            Policy used to validate new users
        port
            Database server port, driver default if omitted
        drivername
            SQLAlchemy dialect+driver name
        """
        url = URL.create(
            drivername,
            username=user,
            password=password,
            host=host,
            port=port,
            database=database,
        )
        return cls(url, policy)

    @property
    def engine(self) -> Engine:
        return self._engine

    def test_connection(self) -> bool:
        """Open and close a connection to check that the database is reachable.

        Returns
        -------
        True if a connection could be opened, False otherwise
        """
        try:
            with self._engine.connect():
                return True
        except SQLAlchemyError as e:
            logger.warning("Failed to connect to database %s: %s", self._display_url, e)
            return False

    def has_user(self, username: str) -> bool:
        stmt = (
            select(func.count(1))
            .select_from(ProfileModel)
            .where(ProfileModel.username == username)
        )
        with self._session(f'checking if user "{username}" exists') as session:
            return session.execute(stmt).scalar_one() == 1

    def add_user(
        self,
        username: str,
        email: str,
        screen_name: str,
        password: str,
    ) -> None:
        if self.has_user(username):
            raise UserAlreadyExistsError(username)
        enforce_policy(self._policy, username, email, screen_name, password)

        salt = self._crypt.next_salt()
        hashed_value = self._crypt.hash_password(password, salt)

        try:
            with self._transaction(f'adding user "{username}"') as session:
                profile = ProfileModel(
                    email=email,
                    username=username,
                    screen_name=screen_name,
                    salt=salt,
                )
                session.add(profile)
                # Flush to get the generated id for the credential row
                session.flush()
                session.add(
                    CredentialModel(user_id=profile.id, hashed_value=hashed_value),
                )
        except ConnectionFailureError as e:
            # Lost a race against a concurrent insert of the same username
            if isinstance(e.__cause__, IntegrityError) and self.has_user(username):
                raise UserAlreadyExistsError(username) from e
            raise

        logger.info("Created user: %s", username)

    def remove_user(self, username: str) -> bool:
        if not self.has_user(username):
            return False

        stmt = delete(ProfileModel).where(ProfileModel.username == username)
        with self._transaction(f'removing user "{username}"') as session:
            # The credential row goes with the profile via ON DELETE CASCADE
            removed = session.execute(stmt).rowcount == 1

        if removed:
            logger.info("Deleted user: %s", username)
        return removed

    def list_users(self) -> list[str]:
        with self._session("listing users") as session:
            return list(session.scalars(select(ProfileModel.username)).all())

    def authenticate_detailed(self, username: str, password: str) -> Authentication:
        if not self.has_user(username):
            return Authentication.UNKNOWN_USER

        with self._session(f'authenticating user "{username}"') as session:
            row = self._fetch_id_and_salt(session, username)
            if row is None:
                return Authentication.UNKNOWN_USER
            user_id, salt = row
            hashed_value = session.execute(
                select(CredentialModel.hashed_value).where(
                    CredentialModel.user_id == user_id,
                ),
            ).scalar_one_or_none()

        if hashed_value is not None and self._crypt.verify(password, salt, hashed_value):
            return Authentication.AUTHENTICATED
        return Authentication.WRONG_CREDENTIAL

    def get_user_data(self, username: str) -> UserData | None:
        if not self.has_user(username):
            return None

        stmt = select(ProfileModel.email, ProfileModel.screen_name).where(
            ProfileModel.username == username,
        )
        with self._session(f'fetching data for user "{username}"') as session:
            row = session.execute(stmt).one_or_none()

        if row is None:
            return None
        return UserData(username=username, email=row.email, screen_name=row.screen_name)

    def update_username(self, username: str, new_username: str) -> None:
        # The credential is keyed by id, so only the profile row changes
        self._update_profile(username, username=new_username)

    def update_email(self, username: str, new_email: str) -> None:
        self._update_profile(username, email=new_email)

    def update_screen_name(self, username: str, new_screen_name: str) -> None:
        self._update_profile(username, screen_name=new_screen_name)

    def update_password(self, username: str, new_password: str) -> None:
        if not self.has_user(username):
            return

        salt = self._crypt.next_salt()
        hashed_value = self._crypt.hash_password(new_password, salt)

        with self._transaction(f'updating password of user "{username}"') as session:
            row = self._fetch_id_and_salt(session, username)
            if row is None:
                return
            user_id, _ = row
            session.execute(
                update(ProfileModel).where(ProfileModel.id == user_id).values(salt=salt),
            )
            session.execute(
                update(CredentialModel)
                .where(CredentialModel.user_id == user_id)
                .values(hashed_value=hashed_value),
            )

        logger.debug("Updated password for user: %s", username)

    @property
    def _display_url(self) -> str:
        return self._url.render_as_string(hide_password=True)

    @staticmethod
    def _create_engine(url: URL) -> Engine:
        engine = create_engine(url, poolclass=NullPool)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    def _ensure_tables(self) -> None:
        """Create the profiles and credentials tables in one transaction."""
        try:
            if inspect(self._engine).has_table(ProfileModel.__tablename__):
                return
            logger.info("Creating user directory tables in %s", self._display_url)
            with self._engine.begin() as conn:
                DirectoryBase.metadata.create_all(conn)
        except SQLAlchemyError as e:
            logger.warning("Error creating database tables: %s", e)
            msg = f"Failed to create tables in {self._display_url}"
            raise ConnectionFailureError(msg) from e

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        """Session for reads; the connection is released on exit."""
        try:
            with self._session_maker() as session:
                yield session
        except SQLAlchemyError as e:
            logger.warning("Error %s: %s", action, e)
            raise ConnectionFailureError(f"Error {action}") from e

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        """Session wrapped in a transaction.

        Commits when the block completes and rolls back if it raises. The
        connection is released on every exit path.
        """
        try:
            with self._session_maker.begin() as session:
                yield session
        except SQLAlchemyError as e:
            logger.warning("Error %s, changes rolled back: %s", action, e)
            raise ConnectionFailureError(f"Error {action}") from e

    @staticmethod
    def _fetch_id_and_salt(session: Session, username: str) -> tuple[int, str] | None:
        stmt = select(ProfileModel.id, ProfileModel.salt).where(
            ProfileModel.username == username,
        )
        row = session.execute(stmt).one_or_none()
        return (row.id, row.salt) if row is not None else None

    def _update_profile(self, username: str, /, **values: str) -> None:
        if not self.has_user(username):
            return

        stmt = (
            update(ProfileModel)
            .where(ProfileModel.username == username)
            .values(**values)
        )
        fields = ", ".join(values)
        with self._transaction(f'updating {fields} of user "{username}"') as session:
            session.execute(stmt)

        logger.debug("Updated %s for user: %s", fields, username)
