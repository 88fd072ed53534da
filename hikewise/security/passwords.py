"""Password hashing helpers."""

from __future__ import annotations

import hmac
from hashlib import sha256

import bcrypt

MIN_PASSWORD_LENGTH = 8
DEFAULT_BCRYPT_ROUNDS = 12


def _pepper(password: str, pepper: str) -> bytes:
    """HMAC the password with the pepper.

    The hex digest is a fixed 64 bytes, which keeps bcrypt's 72-byte input
    limit out of play for long passwords.
    """

    if not pepper:
        raise ValueError("Password pepper must be configured to hash passwords")

    return hmac.new(pepper.encode(), password.encode("utf-8"), sha256).hexdigest().encode()


def hash_password(password: str, pepper: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Return a bcrypt hash (salt embedded) of the peppered password."""

    hashed = bcrypt.hashpw(_pepper(password, pepper), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, pepper: str, password_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash."""

    return bcrypt.checkpw(_pepper(password, pepper), password_hash.encode("utf-8"))
