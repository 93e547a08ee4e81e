"""Password hashing utilities."""

from __future__ import annotations

import bcrypt

from account.exceptions import PasswordTooLong

BCRYPT_MAX_PASSWORD_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Raises:
        PasswordTooLong: If the password is over 72 bytes in UTF-8
    """
    if not password_fits_bcrypt(password):
        raise PasswordTooLong()
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    if not password_fits_bcrypt(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed or empty stored hash
        return False


class BcryptPasswordEncoder:
    def encode(self, raw_password: str) -> str:
        return hash_password(raw_password)

    def matches(self, raw_password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        return verify_password(raw_password, hashed_password)
