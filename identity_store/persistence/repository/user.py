"""CQL implementation of User repository."""

from collections.abc import Sequence
from typing import Any, Optional

import logfire

from identity_store.domain.error import QueryError, UserNotFoundError
from identity_store.domain.model import User, UserConnection
from identity_store.domain.repository import UserRepository
from identity_store.domain.value import UserId
from identity_store.persistence.mappers import (
    row_to_user,
    row_to_user_connection,
    user_connections_to_values,
    user_to_values,
)
from identity_store.persistence.query import UserQuery
from identity_store.persistence.schema import UserStatements
from identity_store.persistence.session import CqlSession, Row


class CqlUserRepository(UserRepository):
    """UserRepository backed by a Cassandra/ScyllaDB session.

    Holds no state besides the session and statement text; every call is a
    single awaited request per statement, with no retries.
    """

    def __init__(self, session: CqlSession, statements: UserStatements) -> None:
        """Initialize repository with database session.

        Args:
            session: CQL session supplied by the application
            statements: Statement text for the configured keyspace
        """
        self.session = session
        self.statements = statements

    async def _execute(
        self, statement: str, parameters: Sequence[Any] = ()
    ) -> Sequence[Row]:
        try:
            return await self.session.execute(statement, parameters)
        except Exception as e:
            logfire.warn("Query failed", statement=statement, error=str(e))
            raise QueryError(statement, e) from e

    async def create_prerequisite_objects(self) -> None:
        """Create the users table, its username index and user_connections."""
        with logfire.span(
            "user_repository.create_prerequisite_objects",
            keyspace=self.statements.keyspace,
        ):
            for statement in self.statements.ddl:
                try:
                    await self.session.execute_ddl(statement)
                except Exception as e:
                    logfire.warn("Schema statement failed", error=str(e))
                    raise QueryError(statement, e) from e

    async def save(self, user: User) -> User:
        """Insert a user and one user_connections row per linked identity.

        Both value sets are fully encoded before anything is executed, so an
        encoding failure never leaves a partial insert behind.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span("user_repository.save", user_id=str(user.id)):
            user_values = user_to_values(user)
            connection_values = user_connections_to_values(user)

            await self._execute(
                self.statements.insert_user, tuple(user_values.values())
            )
            for values in connection_values:
                await self._execute(
                    self.statements.insert_user_connection, tuple(values.values())
                )

            logfire.info(
                "User saved",
                user_id=str(user.id),
                connections=len(connection_values),
            )
            return user

    async def find(self, query: UserQuery) -> Optional[User]:
        """Run a user lookup.

        Args:
            query: Lookup by id or by username

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "user_repository.find", kind=query.kind.value, value=str(query.value)
        ):
            statement, parameters = query.to_statement(self.statements)
            rows = await self._execute(statement, parameters)
            if not rows:
                logfire.info("User not found", kind=query.kind.value)
                return None
            # The username index does not enforce uniqueness
            if len(rows) > 1:
                logfire.warn(
                    "Lookup matched several users, using the first",
                    kind=query.kind.value,
                    value=str(query.value),
                    matches=len(rows),
                )
            return row_to_user(rows[0])

    async def load(self, query: UserQuery) -> User:
        """Run a user lookup that must find a user.

        Raises:
            UserNotFoundError: If no row matches
        """
        user = await self.find(query)
        if user is None:
            raise UserNotFoundError("User", str(query.value))
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self.find(UserQuery.by_id(user_id))

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: Username to search for

        Returns:
            User if found, None otherwise
        """
        return await self.find(UserQuery.by_username(username))

    async def find_connections(self, user_id: UserId) -> list[UserConnection]:
        """Find all provider connections of a user.

        Args:
            user_id: User ID to find connections for

        Returns:
            List of UserConnection objects (may be empty)
        """
        with logfire.span("user_repository.find_connections", user_id=str(user_id)):
            rows = await self._execute(
                self.statements.select_connections_by_user, (user_id,)
            )
            return [row_to_user_connection(row) for row in rows]
