"""Unit tests for InMemoryUserDirectory."""

import pytest

from tests.shared.directory_contract import ALICE, UserDirectoryContract
from userdir.persistence.memory import InMemoryUserDirectory
from userdir.schemas import UserData


@pytest.fixture
def directory() -> InMemoryUserDirectory:
    """Create an empty in-memory directory."""
    return InMemoryUserDirectory()


class TestInMemoryUserDirectory(UserDirectoryContract):
    """Run the directory contract against the in-memory backend."""


class TestInMemoryUserDirectoryState:
    """Behavior specific to the in-memory backend."""

    def test_instances_do_not_share_state(self):
        """Each directory owns its own storage."""
        first = InMemoryUserDirectory()
        second = InMemoryUserDirectory()

        first.add_user(*ALICE)

        assert first.has_user("alice") is True
        assert second.has_user("alice") is False

    def test_update_password_changes_salt(self, directory):
        """A new salt is drawn every time the password is set."""
        directory.add_user(*ALICE)
        salt_before = directory._find_entry("alice").salt

        directory.update_password("alice", "secret")

        assert directory._find_entry("alice").salt != salt_before

    def test_rename_keeps_credential(self, directory):
        """Renaming re-points the index without touching the credential."""
        directory.add_user(*ALICE)
        entry_before = directory._find_entry("alice")

        directory.update_username("alice", "alicia")

        entry_after = directory._find_entry("alicia")
        assert entry_after.salt == entry_before.salt
        assert entry_after.hashed_value == entry_before.hashed_value

    def test_rename_onto_existing_username_is_not_checked(self, directory):
        """Renaming onto a taken name displaces the other user."""
        directory.add_user(*ALICE)
        directory.add_user("bob", "b@x.com", "Bob", "pw")

        directory.update_username("alice", "bob")

        assert directory.list_users() == ["bob"]
        assert directory.get_user_data("bob") == UserData("bob", "a@x.com", "Al")
        assert directory.authenticate("bob", "secret") is True
        assert directory.authenticate("bob", "pw") is False

    def test_rename_onto_existing_username_drops_displaced_credential(
        self,
        directory,
    ):
        """The displaced user's profile and credential are removed together."""
        directory.add_user(*ALICE)
        directory.add_user("bob", "b@x.com", "Bob", "pw")

        directory.update_username("alice", "bob")

        assert len(directory._entries) == 1
        assert len(directory._ids) == 1

    def test_rename_to_same_username_keeps_user(self, directory):
        directory.add_user(*ALICE)

        directory.update_username("alice", "alice")

        assert directory.list_users() == ["alice"]
        assert directory.authenticate("alice", "secret") is True
        assert len(directory._entries) == 1

    def test_stored_record_is_not_mutated_by_updates(self, directory):
        """Records handed out earlier keep their values after an update."""
        directory.add_user(*ALICE)
        snapshot = directory.get_user_data("alice")

        directory.update_email("alice", "new@x.com")

        assert snapshot.email == "a@x.com"
        assert directory.get_user_data("alice").email == "new@x.com"

    def test_password_is_not_stored_in_plaintext(self, directory):
        directory.add_user(*ALICE)

        entry = directory._find_entry("alice")

        assert "secret" not in entry.hashed_value
        assert len(entry.hashed_value) == 128
