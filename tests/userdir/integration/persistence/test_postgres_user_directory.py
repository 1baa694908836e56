"""Integration tests for UserDirectorySQLAlchemy with Testcontainers PostgreSQL."""

import pytest
from sqlalchemy import func, select

from tests.shared.directory_contract import ALICE, UserDirectoryContract
from userdir.exceptions import ConnectionFailureError
from userdir.persistence.sqlalchemy import (
    CredentialModel,
    ProfileModel,
    UserDirectorySQLAlchemy,
)


@pytest.fixture
def directory(postgres_url) -> UserDirectorySQLAlchemy:
    """Create a directory on an empty PostgreSQL database."""
    return UserDirectorySQLAlchemy(postgres_url)


@pytest.mark.integration
class TestPostgresUserDirectory(UserDirectoryContract):
    """Run the directory contract against PostgreSQL."""


@pytest.mark.integration
class TestPostgresUserDirectorySpecifics:
    """Behavior that depends on PostgreSQL itself."""

    def test_from_credentials(self, postgres_container, postgres_url):
        """A directory can be built from host, database, user and password."""
        directory = UserDirectorySQLAlchemy.from_credentials(
            host=postgres_container.get_container_host_ip(),
            database=postgres_container.dbname,
            user=postgres_container.username,
            password=postgres_container.password,
            port=int(postgres_container.get_exposed_port(5432)),
        )

        directory.add_user(*ALICE)

        assert directory.test_connection() is True
        assert directory.authenticate("alice", "secret") is True

    def test_remove_user_cascades_to_credential(self, directory):
        directory.add_user(*ALICE)

        directory.remove_user("alice")

        with directory.engine.connect() as conn:
            count = conn.execute(
                select(func.count()).select_from(CredentialModel),
            ).scalar_one()
        assert count == 0

    def test_rename_keeps_surrogate_id(self, directory):
        directory.add_user(*ALICE)
        stmt = select(ProfileModel.id).where(ProfileModel.username == "alice")
        with directory.engine.connect() as conn:
            user_id = conn.execute(stmt).scalar_one()

        directory.update_username("alice", "alicia")

        stmt = select(ProfileModel.id).where(ProfileModel.username == "alicia")
        with directory.engine.connect() as conn:
            assert conn.execute(stmt).scalar_one() == user_id

    def test_wrong_password_for_database_raises(self, postgres_container):
        """Bad database credentials surface as ConnectionFailureError."""
        with pytest.raises(ConnectionFailureError):
            UserDirectorySQLAlchemy.from_credentials(
                host=postgres_container.get_container_host_ip(),
                database=postgres_container.dbname,
                user=postgres_container.username,
                password="not-the-password",
                port=int(postgres_container.get_exposed_port(5432)),
            )
