"""Security utilities."""

from .password import hash_password

__all__ = [
    "hash_password",
]
