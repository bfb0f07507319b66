"""Repository interfaces for the identity store.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from identity_store.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
]
