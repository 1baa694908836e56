"""Directory services.

Provides salt generation and password hashing.
"""

from userdir.services.password_crypt import PasswordCryptService

__all__ = ["PasswordCryptService"]
