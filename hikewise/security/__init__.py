"""Security utilities for the Hikewise backend."""

from .passwords import (
    DEFAULT_BCRYPT_ROUNDS,
    MIN_PASSWORD_LENGTH,
    hash_password,
    verify_password,
)

__all__ = [
    "DEFAULT_BCRYPT_ROUNDS",
    "MIN_PASSWORD_LENGTH",
    "hash_password",
    "verify_password",
]
