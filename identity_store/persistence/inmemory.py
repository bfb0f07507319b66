"""In-memory CQL session for testing.

Understands exactly the statements of one UserStatements instance and keeps
rows in dictionaries. Timestamps are stored at millisecond precision and
returned as naive UTC datetimes, and an empty identity map is stored as
null, the way a CQL cluster behaves.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, Dict, List, Tuple
from uuid import UUID

from identity_store.persistence.schema import (
    USER_COLUMNS,
    USER_CONNECTION_COLUMNS,
    UserStatements,
)
from identity_store.persistence.session import Row

_EPOCH = datetime(1970, 1, 1)


class InMemorySessionError(Exception):
    """Raised for statements a real cluster would reject."""

    pass


def _to_column_timestamp(value: Any) -> datetime:
    seconds, nanoseconds = value
    return _EPOCH + timedelta(
        seconds=seconds, milliseconds=nanoseconds // 1_000_000
    )


class InMemorySession:
    """In-memory implementation of CqlSession."""

    def __init__(self, statements: UserStatements) -> None:
        self.statements = statements
        self._created: set[str] = set()
        self._users: Dict[UUID, Dict[str, Any]] = {}
        self._connections: Dict[Tuple[UUID, str], Dict[str, Any]] = {}
        self.executed: List[Tuple[str, Tuple[Any, ...]]] = []

    async def execute_ddl(self, statement: str) -> None:
        """Record a schema statement; IF NOT EXISTS makes repeats no-ops."""
        if statement not in self.statements.ddl:
            raise InMemorySessionError(f"Unsupported schema statement: {statement}")
        if (
            statement == self.statements.create_username_index
            and self.statements.create_users_table not in self._created
        ):
            raise InMemorySessionError("unconfigured table users")
        self._created.add(statement)

    async def execute(
        self, statement: str, parameters: Sequence[Any] = ()
    ) -> Sequence[Row]:
        """Execute one of the known statements against the in-memory tables."""
        parameters = tuple(parameters)
        self.executed.append((statement, parameters))
        s = self.statements

        if statement == s.insert_user:
            self._require(s.create_users_table, "users")
            row = self._bind(USER_COLUMNS, parameters)
            # Empty collections are stored as null
            row["identities"] = dict(row["identities"]) or None
            row["registered_at"] = _to_column_timestamp(row["registered_at"])
            self._users[row["id"]] = row
            return []

        if statement == s.insert_user_connection:
            self._require(s.create_user_connections_table, "user_connections")
            row = self._bind(USER_CONNECTION_COLUMNS, parameters)
            self._connections[(row["user_id"], row["connection_provider"])] = row
            return []

        if statement == s.select_user_by_id:
            self._require(s.create_users_table, "users")
            (user_id,) = parameters
            row = self._users.get(user_id)
            return [self._copy(row)] if row else []

        if statement == s.select_user_by_username:
            self._require(s.create_users_table, "users")
            if s.create_username_index not in self._created:
                raise InMemorySessionError(
                    "Cannot execute this query without an index on username"
                )
            (username,) = parameters
            return [
                self._copy(row)
                for row in self._users.values()
                if row["username"] == username
            ]

        if statement == s.select_connections_by_user:
            self._require(s.create_user_connections_table, "user_connections")
            (user_id,) = parameters
            # Clustering order: connection_provider ascending
            return [
                dict(row)
                for key, row in sorted(self._connections.items())
                if key[0] == user_id
            ]

        raise InMemorySessionError(f"Unsupported statement: {statement}")

    def _require(self, create_statement: str, table: str) -> None:
        if create_statement not in self._created:
            raise InMemorySessionError(f"unconfigured table {table}")

    @staticmethod
    def _bind(columns: tuple[str, ...], parameters: Tuple[Any, ...]) -> Dict[str, Any]:
        if len(parameters) != len(columns):
            raise InMemorySessionError(
                f"Expected {len(columns)} bound values, got {len(parameters)}"
            )
        return dict(zip(columns, parameters))

    @staticmethod
    def _copy(row: Dict[str, Any]) -> Dict[str, Any]:
        copied = dict(row)
        if row["identities"] is not None:
            copied["identities"] = dict(row["identities"])
        return copied
