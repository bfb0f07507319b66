"""CQL repository implementations."""

from identity_store.persistence.repository.user import CqlUserRepository

__all__ = [
    "CqlUserRepository",
]
