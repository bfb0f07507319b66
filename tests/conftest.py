"""Test configuration and helpers."""

from hashlib import sha256

from identity_store.domain.model import User


def make_password_hash(password: str = "123456", salt: str = "salt") -> bytes:
    """Helper producing a 32-byte salted password hash.

    The identity store treats the hash as opaque; any 32-byte digest works.
    """
    return sha256((salt + password).encode("utf-8")).digest()


def make_user(**overrides) -> User:
    """Helper building the canonical test user ("test", "test@test.com")."""
    fields = {
        "username": "test",
        "email": "test@test.com",
        "password_hash": make_password_hash(),
    }
    fields.update(overrides)
    return User(**fields)
