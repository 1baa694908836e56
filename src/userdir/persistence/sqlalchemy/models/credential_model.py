"""SQLAlchemy model for user credentials."""

from sqlalchemy import CHAR, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from userdir.persistence.sqlalchemy.base import DirectoryBase
from userdir.persistence.sqlalchemy.models.profile_model import ProfileModel


class CredentialModel(DirectoryBase):
    """
    SQLAlchemy model for a user's hashed password.

    Keyed by the profile's surrogate id. Deleting the profile row removes
    the credential through the database's ON DELETE CASCADE.

    Table: credentials
    """

    __tablename__ = "credentials"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(ProfileModel.id, ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )

    # SHA3-512 hex digest
    hashed_value: Mapped[str] = mapped_column(CHAR(128), nullable=False)

    def __repr__(self) -> str:
        return f"<CredentialModel(user_id={self.user_id})>"
