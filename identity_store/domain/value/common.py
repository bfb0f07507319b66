"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for identity store value objects.

    Value objects are immutable and compared by value. Subclasses may narrow
    equality (see RegistrationTimestamp) but never make it identity-based.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
