"""SQLAlchemy declarative base for userdir models."""

from sqlalchemy.orm import DeclarativeBase


class DirectoryBase(DeclarativeBase):
    """Declarative base for the profile and credential tables."""
