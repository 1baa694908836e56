"""SQLAlchemy models for userdir."""

from userdir.persistence.sqlalchemy.models.credential_model import CredentialModel
from userdir.persistence.sqlalchemy.models.profile_model import ProfileModel

__all__ = ["CredentialModel", "ProfileModel"]
