"""Salted password hashing.

Passwords are hashed with a single SHA3-512 pass over the UTF-8 password
bytes followed by the raw salt bytes. Salts and digests are exchanged as
uppercase hex strings.
"""

import hashlib
import secrets
import string


class PasswordCryptService:
    """Service for generating salts and hashing passwords.

    Examples
    --------
    >>> service = PasswordCryptService()
    >>> salt = service.next_salt()
    >>> hashed = service.hash_password("my_secure_password", salt)
    >>> service.verify("my_secure_password", salt, hashed)
    True
    >>> service.verify("wrong_password", salt, hashed)
    False
    """

    # Number of random bytes in a salt (hex-encoded to twice as many chars)
    SALT_LENGTH = 32

    def next_salt(self) -> str:
        """Generate a random salt.

        Returns
        -------
        SALT_LENGTH bytes from a cryptographically secure source, as an
        uppercase hex string
        """
        return secrets.token_bytes(self.SALT_LENGTH).hex().upper()

    def hash_password(self, password: str | None, salt: str | None) -> str:
        """Hash a plaintext password with the given salt.

        Parameters
        ----------
        password
            The plaintext password to hash
        salt
            Hex-encoded salt, as returned by ``next_salt``

        Returns
        -------
        The SHA3-512 digest of password bytes + salt bytes as an uppercase
        hex string (128 characters)

        Raises
        ------
        ValueError
            If password or salt is empty or missing, or salt is not hex
        """
        if not password:
            msg = "Invalid password string"
            raise ValueError(msg)
        if not salt:
            msg = "Invalid salt string"
            raise ValueError(msg)

        # bytes.fromhex would skip whitespace
        if len(salt) % 2 or not all(c in string.hexdigits for c in salt):
            msg = "Invalid salt string"
            raise ValueError(msg)
        salt_bytes = bytes.fromhex(salt)

        digest = hashlib.sha3_512(password.encode("utf-8") + salt_bytes)
        return digest.hexdigest().upper()

    def verify(self, password: str, salt: str, hashed_value: str) -> bool:
        """Check a password against a stored salt and hash.

        Parameters
        ----------
        password
            The plaintext password to check
        salt
            The salt stored alongside the hash
        hashed_value
            The stored hash to compare against

        Returns
        -------
        True if password matches, False otherwise
        """
        # Stored passwords are never empty
        if not password:
            return False
        return self.hash_password(password, salt) == hashed_value.strip()
