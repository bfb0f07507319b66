"""User record.

A single immutable record serves both directions of the mapping: callers
build one to insert it, and the row decoder builds one from a fetched row.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import Field, field_validator

from identity_store.domain.model.common import DomainModel
from identity_store.domain.value import (
    IdentityProvider,
    RegistrationTimestamp,
    UserId,
)

PASSWORD_HASH_LENGTH = 32

# Stored for users who only authenticate through an external provider.
NO_PASSWORD = bytes(PASSWORD_HASH_LENGTH)


def _new_user_id() -> UserId:
    return UserId(uuid4())


class User(DomainModel):
    """A user of the identity service.

    A user may register with a password, link one or more external identity
    providers, or both. Emptiness of username and email is not checked here;
    the write path refuses to encode such a record.
    """

    id: UserId = Field(default_factory=_new_user_id)
    username: str
    email: str
    # At most one subject id per provider, as issued by that provider
    identities: dict[IdentityProvider, str] = Field(default_factory=dict)
    # Output of a 32-byte content hash over the salted password
    password_hash: bytes = Field(strict=True)
    registered_at: RegistrationTimestamp = Field(
        default_factory=RegistrationTimestamp.now
    )

    @field_validator("password_hash")
    @classmethod
    def validate_password_hash_length(cls, v: bytes) -> bytes:
        """Validate the hash is exactly 32 bytes."""
        if len(v) != PASSWORD_HASH_LENGTH:
            raise ValueError(
                f"Password hash must be {PASSWORD_HASH_LENGTH} bytes, got {len(v)}"
            )
        return v

    @field_validator("registered_at", mode="before")
    @classmethod
    def convert_calendar_time(cls, v: Any) -> Any:
        """Accept a datetime and convert it to a registration timestamp."""
        if isinstance(v, datetime):
            return RegistrationTimestamp.from_calendar_time(v)
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
            and self.identities == other.identities
            and self.password_hash == other.password_hash
            and self.registered_at == other.registered_at
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.id,
                self.username,
                self.email,
                frozenset(self.identities.items()),
                self.password_hash,
                self.registered_at,
            )
        )

    @property
    def has_password(self) -> bool:
        """Whether the user registered with a password."""
        return self.password_hash != NO_PASSWORD

    @property
    def registered_at_datetime(self) -> datetime:
        """Registration time as a UTC-aware datetime."""
        return self.registered_at.to_calendar_time()
