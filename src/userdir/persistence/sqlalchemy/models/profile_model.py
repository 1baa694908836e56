"""SQLAlchemy model for user profiles."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from userdir.persistence.sqlalchemy.base import DirectoryBase


class ProfileModel(DirectoryBase):
    """
    SQLAlchemy model for a user's profile.

    The surrogate ``id`` is the stable identity of the user. ``username``
    is a unique but mutable attribute of it, so renames never touch the
    credential row. The salt lives here, the hash in ``credentials``.

    Table: profiles
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    screen_name: Mapped[str] = mapped_column(Text, nullable=False)
    salt: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ProfileModel(id={self.id}, username={self.username})>"
