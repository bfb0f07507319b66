"""Domain value objects for the identity store."""

from identity_store.domain.value.identifiers import UserId
from identity_store.domain.value.timestamp import (
    NativeTimestamp,
    RegistrationTimestamp,
)
from identity_store.domain.value.types import IdentityProvider

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "IdentityProvider",
    "NativeTimestamp",
    "RegistrationTimestamp",
]
