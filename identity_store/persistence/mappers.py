"""Mappers between user records and CQL column values.

Write path: ``user_to_values`` turns a User into the ordered column values of
the users insert statement. Read path: ``row_to_user`` turns a fetched row
back into a User. Both directions raise on the first field that cannot be
converted; neither substitutes a default for a bad or missing value.

The password hash column is TEXT, so the 32 raw bytes travel as base58.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID

import base58

from identity_store.domain.error import (
    ColumnTypeMismatchError,
    DecodingError,
    EncodingError,
    MissingColumnError,
    ProviderDecodeError,
    SerializationError,
    TimestampOutOfRangeError,
)
from identity_store.domain.model import PASSWORD_HASH_LENGTH, User, UserConnection
from identity_store.domain.value import (
    IdentityProvider,
    NativeTimestamp,
    RegistrationTimestamp,
    UserId,
)
from identity_store.domain.value.timestamp import INT64_MAX, INT64_MIN
from identity_store.persistence.schema import USER_COLUMNS, USER_CONNECTION_COLUMNS
from identity_store.persistence.session import Row

# ============================================================================
# PASSWORD HASH (bytes <-> base58 text)
# ============================================================================


def encode_password_hash(password_hash: bytes) -> str:
    """Encode a 32-byte password hash as base58 text.

    Raises:
        EncodingError: If the value is not 32 bytes
    """
    if not isinstance(password_hash, (bytes, bytearray)):
        raise EncodingError(
            "password_hash", f"expected bytes, got {type(password_hash).__name__}"
        )
    if len(password_hash) != PASSWORD_HASH_LENGTH:
        raise EncodingError(
            "password_hash",
            f"expected {PASSWORD_HASH_LENGTH} bytes, got {len(password_hash)}",
        )
    return base58.b58encode(bytes(password_hash)).decode("ascii")


def decode_password_hash(text: str) -> bytes:
    """Decode base58 text back into the 32-byte password hash.

    Raises:
        DecodingError: If the text is not canonical base58 of 32 bytes
    """
    try:
        raw = base58.b58decode(text)
    except ValueError as e:
        raise DecodingError("password_hash", f"invalid base58 text: {e}") from e

    if len(raw) != PASSWORD_HASH_LENGTH:
        raise DecodingError(
            "password_hash",
            f"expected {PASSWORD_HASH_LENGTH} bytes, decoded {len(raw)}",
        )
    # b58decode tolerates surrounding whitespace; the column text must not
    if base58.b58encode(raw).decode("ascii") != text:
        raise DecodingError("password_hash", "non-canonical base58 text")
    return raw


# ============================================================================
# WRITE PATH
# ============================================================================


def _encode_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise SerializationError(field, f"expected text, got {type(value).__name__}")
    if not value:
        raise SerializationError(field, "must not be empty")
    return value


def _encode_id(field: str, value: Any) -> UUID:
    if not isinstance(value, UUID):
        raise SerializationError(field, f"expected UUID, got {type(value).__name__}")
    if value.int == 0:
        raise SerializationError(field, "must not be the nil UUID")
    return value


def _encode_identities(identities: Any) -> Dict[str, str]:
    if not isinstance(identities, Mapping):
        raise SerializationError(
            "identities", f"expected mapping, got {type(identities).__name__}"
        )

    encoded: Dict[str, str] = {}
    for provider, subject_id in identities.items():
        if not isinstance(provider, IdentityProvider):
            raise SerializationError("identities", f"unknown provider {provider!r}")
        if not isinstance(subject_id, str):
            raise SerializationError(
                "identities",
                f"subject id for {provider.to_wire()} must be text, "
                f"got {type(subject_id).__name__}",
            )
        encoded[provider.to_wire()] = subject_id
    return encoded


def _encode_registered_at(value: Any) -> NativeTimestamp:
    if not isinstance(value, RegistrationTimestamp):
        raise SerializationError(
            "registered_at",
            f"expected RegistrationTimestamp, got {type(value).__name__}",
        )
    # The column stores signed 64-bit milliseconds
    if not INT64_MIN <= value.to_milliseconds() <= INT64_MAX:
        raise SerializationError(
            "registered_at", "outside the range of a CQL timestamp"
        )
    return value.to_native()


def user_to_values(user: User) -> Dict[str, Any]:
    """Convert a User into the column values of the users insert.

    Keys follow the insert statement's column order, so
    ``tuple(values.values())`` is its positional parameter list.

    Args:
        user: User record

    Returns:
        Ordered mapping of column name to column value

    Raises:
        SerializationError: If a field cannot be represented as a column
        EncodingError: If the password hash cannot be base58-encoded
    """
    return {
        "id": _encode_id("id", user.id),
        "username": _encode_text("username", user.username),
        "email": _encode_text("email", user.email),
        "identities": _encode_identities(user.identities),
        "password_hash": encode_password_hash(user.password_hash),
        "registered_at": _encode_registered_at(user.registered_at),
    }


def user_connections_to_values(user: User) -> List[Dict[str, Any]]:
    """Convert a user's linked identities into user_connections rows.

    Args:
        user: User record

    Returns:
        One ordered column mapping per linked provider

    Raises:
        SerializationError: If the id or an identity cannot be represented
    """
    user_id = _encode_id("id", user.id)
    return [
        {
            "user_id": user_id,
            "connection_provider": provider,
            "id_for_provider": subject_id,
        }
        for provider, subject_id in _encode_identities(user.identities).items()
    ]


# ============================================================================
# READ PATH
# ============================================================================


def _column(
    row: Row, name: str, columns: tuple[str, ...], nullable: bool = False
) -> Any:
    """Read a column by name, falling back to its position for plain rows.

    An absent column is always an error. A null value is an error unless the
    column is ``nullable``, in which case None is returned.
    """
    if isinstance(row, Mapping):
        if name not in row:
            raise MissingColumnError(name)
        value = row[name]
    elif hasattr(row, "_fields"):
        # Named tuple rows, as CQL drivers return by default
        if name not in row._fields:
            raise MissingColumnError(name)
        value = getattr(row, name)
    else:
        try:
            value = row[columns.index(name)]
        except IndexError as e:
            raise MissingColumnError(name) from e

    if value is None and not nullable:
        raise MissingColumnError(name)
    return value


def _decode_uuid(column: str, value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError as e:
            raise DecodingError(column, f"invalid UUID {value!r}") from e
    raise ColumnTypeMismatchError(column, "uuid", value)


def _decode_text(column: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ColumnTypeMismatchError(column, "text", value)
    return value


def _decode_provider(column: str, value: Any) -> IdentityProvider:
    if not isinstance(value, (str, bytes)):
        raise ColumnTypeMismatchError(column, "text", value)
    try:
        return IdentityProvider.from_wire(value)
    except ProviderDecodeError as e:
        raise DecodingError(column, str(e)) from e


def _decode_identities(value: Any) -> dict[IdentityProvider, str]:
    # CQL stores an empty collection as null
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ColumnTypeMismatchError("identities", "map<text, text>", value)
    return {
        _decode_provider("identities", provider): _decode_text(
            "identities", subject_id
        )
        for provider, subject_id in value.items()
    }


def _decode_registered_at(value: Any) -> RegistrationTimestamp:
    try:
        if isinstance(value, datetime):
            # What CQL drivers hand back for a timestamp column
            return RegistrationTimestamp.from_calendar_time(value)
        if (
            isinstance(value, tuple)
            and len(value) == 2
            and all(isinstance(part, int) for part in value)
        ):
            seconds, nanoseconds = value
            return RegistrationTimestamp.from_native(seconds, nanoseconds)
        if isinstance(value, int) and not isinstance(value, bool):
            return RegistrationTimestamp.from_milliseconds(value)
    except TimestampOutOfRangeError as e:
        raise DecodingError("registered_at", str(e)) from e
    raise ColumnTypeMismatchError("registered_at", "timestamp", value)


def row_to_user(row: Row) -> User:
    """Convert a users row into a User.

    Columns are read by name when the row carries names, otherwise by the
    table's fixed column order. A null identity map is the empty map,
    since CQL stores empty collections as null.

    Args:
        row: Fetched row

    Returns:
        User record

    Raises:
        MissingColumnError: If a column is absent, or unset other than identities
        ColumnTypeMismatchError: If a column holds the wrong type
        DecodingError: If a column holds malformed data
    """
    return User(
        id=UserId(_decode_uuid("id", _column(row, "id", USER_COLUMNS))),
        username=_decode_text("username", _column(row, "username", USER_COLUMNS)),
        email=_decode_text("email", _column(row, "email", USER_COLUMNS)),
        identities=_decode_identities(
            _column(row, "identities", USER_COLUMNS, nullable=True)
        ),
        password_hash=decode_password_hash(
            _decode_text("password_hash", _column(row, "password_hash", USER_COLUMNS))
        ),
        registered_at=_decode_registered_at(
            _column(row, "registered_at", USER_COLUMNS)
        ),
    )


def row_to_user_connection(row: Row) -> UserConnection:
    """Convert a user_connections row into a UserConnection.

    Args:
        row: Fetched row

    Returns:
        UserConnection record
    """
    columns = USER_CONNECTION_COLUMNS
    return UserConnection(
        user_id=UserId(_decode_uuid("user_id", _column(row, "user_id", columns))),
        provider=_decode_provider(
            "connection_provider", _column(row, "connection_provider", columns)
        ),
        id_for_provider=_decode_text(
            "id_for_provider", _column(row, "id_for_provider", columns)
        ),
    )
