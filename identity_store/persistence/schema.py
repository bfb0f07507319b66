"""CQL schema and statement text for the identity tables.

These statements mirror the tables a deployment provisions. All values are
bound through ``?`` placeholders; only the keyspace name, which comes from
settings and is validated as an identifier, is formatted into the text.
"""

import re
from dataclasses import dataclass

from identity_store.util.error import ConfigurationError

DEFAULT_KEYSPACE = "identity"

# Column order of the users table; the insert statement and positional rows
# both follow it.
USER_COLUMNS = (
    "id",
    "username",
    "email",
    "identities",
    "password_hash",
    "registered_at",
)

USER_CONNECTION_COLUMNS = (
    "user_id",
    "connection_provider",
    "id_for_provider",
)

# CQL keyspace names: alphanumeric and underscores, at most 48 characters
_KEYSPACE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]{0,47}$")

# ============================================================================
# USERS TABLE
# ============================================================================
_CREATE_USERS_TABLE = """CREATE TABLE IF NOT EXISTS {keyspace}.users (
    id UUID,
    username TEXT,
    email TEXT,
    identities MAP<TEXT, TEXT>,
    password_hash TEXT,
    registered_at TIMESTAMP,
    PRIMARY KEY (id)
);"""

# Mapping from usernames to users, for lookup by username
_CREATE_USERNAME_INDEX = "CREATE INDEX IF NOT EXISTS ON {keyspace}.users (username);"

_INSERT_USER = (
    "INSERT INTO {keyspace}.users "
    "(id, username, email, identities, password_hash, registered_at) "
    "VALUES (?, ?, ?, ?, ?, ?);"
)

_SELECT_USER_BY_ID = "SELECT * FROM {keyspace}.users WHERE id = ?;"
_SELECT_USER_BY_USERNAME = "SELECT * FROM {keyspace}.users WHERE username = ?;"

# ============================================================================
# USER CONNECTIONS TABLE (one subject id per provider per user)
# ============================================================================
_CREATE_USER_CONNECTIONS_TABLE = """CREATE TABLE IF NOT EXISTS {keyspace}.user_connections (
    user_id UUID,
    connection_provider TEXT,
    id_for_provider TEXT,
    PRIMARY KEY (user_id, connection_provider)
);"""

_INSERT_USER_CONNECTION = (
    "INSERT INTO {keyspace}.user_connections "
    "(user_id, connection_provider, id_for_provider) "
    "VALUES (?, ?, ?);"
)

_SELECT_CONNECTIONS_BY_USER = (
    "SELECT * FROM {keyspace}.user_connections WHERE user_id = ?;"
)


@dataclass(frozen=True)
class UserStatements:
    """Statement text for one keyspace."""

    keyspace: str
    create_users_table: str
    create_username_index: str
    create_user_connections_table: str
    insert_user: str
    insert_user_connection: str
    select_user_by_id: str
    select_user_by_username: str
    select_connections_by_user: str

    @classmethod
    def for_keyspace(cls, keyspace: str = DEFAULT_KEYSPACE) -> "UserStatements":
        """Build the statements for a keyspace.

        Args:
            keyspace: Keyspace holding the identity tables

        Returns:
            Statement text with the keyspace filled in

        Raises:
            ConfigurationError: If the keyspace is not a valid CQL identifier
        """
        if not _KEYSPACE_PATTERN.match(keyspace):
            raise ConfigurationError(f"Invalid keyspace name: {keyspace!r}")

        return cls(
            keyspace=keyspace,
            create_users_table=_CREATE_USERS_TABLE.format(keyspace=keyspace),
            create_username_index=_CREATE_USERNAME_INDEX.format(keyspace=keyspace),
            create_user_connections_table=_CREATE_USER_CONNECTIONS_TABLE.format(
                keyspace=keyspace
            ),
            insert_user=_INSERT_USER.format(keyspace=keyspace),
            insert_user_connection=_INSERT_USER_CONNECTION.format(keyspace=keyspace),
            select_user_by_id=_SELECT_USER_BY_ID.format(keyspace=keyspace),
            select_user_by_username=_SELECT_USER_BY_USERNAME.format(
                keyspace=keyspace
            ),
            select_connections_by_user=_SELECT_CONNECTIONS_BY_USER.format(
                keyspace=keyspace
            ),
        )

    @property
    def ddl(self) -> tuple[str, ...]:
        """Schema statements, in the order they must run."""
        return (
            self.create_users_table,
            self.create_username_index,
            self.create_user_connections_table,
        )
