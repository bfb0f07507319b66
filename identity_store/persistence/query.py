"""Lookup queries for users.

Only two lookup keys exist: the user's id and their username. The value is
always bound as a statement parameter, never formatted into the text.
"""

from enum import Enum
from typing import Any, Union
from uuid import UUID

from pydantic import model_validator

from identity_store.domain.value import UserId
from identity_store.domain.value.common import ValueObject
from identity_store.persistence.schema import UserStatements


class UserQueryKind(str, Enum):
    """Column a user lookup filters on."""

    BY_ID = "id"
    BY_USERNAME = "username"


class UserQuery(ValueObject):
    """A user lookup: which column to filter on and the value to match."""

    kind: UserQueryKind
    value: Union[UUID, str]

    @model_validator(mode="after")
    def validate_value_matches_kind(self) -> "UserQuery":
        """Validate the value type fits the lookup column."""
        if self.kind is UserQueryKind.BY_ID and not isinstance(self.value, UUID):
            raise ValueError("Lookup by id requires a UUID value")
        if self.kind is UserQueryKind.BY_USERNAME and not isinstance(self.value, str):
            raise ValueError("Lookup by username requires a string value")
        return self

    @classmethod
    def by_id(cls, user_id: UserId) -> "UserQuery":
        """Lookup by unique identifier."""
        return cls(kind=UserQueryKind.BY_ID, value=user_id)

    @classmethod
    def by_username(cls, username: str) -> "UserQuery":
        """Lookup by username (served by the secondary index)."""
        return cls(kind=UserQueryKind.BY_USERNAME, value=username)

    def to_statement(self, statements: UserStatements) -> tuple[str, tuple[Any, ...]]:
        """Build the statement text and its bound parameters.

        Args:
            statements: Statement text for the target keyspace

        Returns:
            (statement, parameters) ready for CqlSession.execute
        """
        if self.kind is UserQueryKind.BY_ID:
            return statements.select_user_by_id, (self.value,)
        return statements.select_user_by_username, (self.value,)
