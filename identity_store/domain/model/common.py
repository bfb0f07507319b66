"""Base model for identity store records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all records mapped to identity tables.

    Records are immutable once constructed; a changed user is a new value.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
