"""Records mapped to identity store tables."""

from identity_store.domain.model.user import NO_PASSWORD, PASSWORD_HASH_LENGTH, User
from identity_store.domain.model.user_connection import UserConnection

__all__ = [
    "User",
    "UserConnection",
    "NO_PASSWORD",
    "PASSWORD_HASH_LENGTH",
]
