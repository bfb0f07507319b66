"""Domain layer errors.

Every conversion failure is raised to the caller with the field or column
that caused it. Nothing here is fatal to the process.
"""


class IdentityStoreError(Exception):
    """Base identity store error."""

    pass


class ProviderDecodeError(IdentityStoreError):
    """Raised when a wire value cannot be decoded into an IdentityProvider."""

    pass


class InvalidProviderError(ProviderDecodeError):
    """Raised when a wire string matches no known identity provider."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown identity provider: {value!r}")


class InvalidEncodingError(ProviderDecodeError):
    """Raised when provider bytes are not valid UTF-8 text."""

    def __init__(self, value: bytes):
        self.value = value
        super().__init__(f"Identity provider is not valid UTF-8: {value!r}")


class TimestampOutOfRangeError(IdentityStoreError):
    """Raised when a timestamp component does not fit its target width."""

    def __init__(self, component: str, value: int):
        self.component = component
        self.value = value
        super().__init__(f"Timestamp {component} out of range: {value}")


class UserEncodeError(IdentityStoreError):
    """Base error for the write path (user -> query values)."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Cannot encode user field '{field}': {reason}")


class SerializationError(UserEncodeError):
    """Raised when a field value cannot be represented as a column value."""

    pass


class EncodingError(UserEncodeError):
    """Raised when the base58 text encoding of a binary field fails."""

    pass


class UserDecodeError(IdentityStoreError):
    """Base error for the read path (row -> user)."""

    def __init__(self, column: str, reason: str):
        self.column = column
        self.reason = reason
        super().__init__(f"Cannot decode column '{column}': {reason}")


class DecodingError(UserDecodeError):
    """Raised when a column holds malformed encoded data."""

    pass


class MissingColumnError(UserDecodeError):
    """Raised when a required column is absent or unset in a row."""

    def __init__(self, column: str):
        super().__init__(column, "missing required column")


class ColumnTypeMismatchError(UserDecodeError):
    """Raised when a column value has an unexpected type."""

    def __init__(self, column: str, expected: str, actual: object):
        self.expected = expected
        self.actual = type(actual).__name__
        super().__init__(column, f"expected {expected}, got {self.actual}")


class QueryError(IdentityStoreError):
    """Raised when the database session fails to execute a statement."""

    def __init__(self, statement: str, cause: Exception):
        self.statement = statement
        self.cause = cause
        super().__init__(f"Query failed: {cause}")


class UserNotFoundError(IdentityStoreError):
    """Raised when a lookup that must return a user returns no rows."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
