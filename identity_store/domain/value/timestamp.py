"""Registration timestamp reconciliation.

Three representations of the same instant meet here:

- the application's calendar time (``datetime``, microsecond precision)
- the native (seconds, nanoseconds) pair handed to and read from the driver
- the CQL ``timestamp`` column itself, which stores milliseconds

RegistrationTimestamp holds the (seconds, nanoseconds) pair and compares at
millisecond granularity, so a value read back from a millisecond column
still equals the high-precision value that was written.
"""

from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from pydantic import Field

from identity_store.domain.error import TimestampOutOfRangeError
from identity_store.domain.value.common import ValueObject

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT32_MAX = 2**31 - 1

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_MICRO = 1_000
MILLIS_PER_SECOND = 1_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class NativeTimestamp(NamedTuple):
    """Driver-level timestamp: whole seconds plus sub-second nanoseconds."""

    seconds: int
    nanoseconds: int


class RegistrationTimestamp(ValueObject):
    """The instant a user registered (UTC).

    Equality and hashing only look at whole milliseconds.
    """

    seconds: int = Field(ge=INT64_MIN, le=INT64_MAX)
    nanoseconds: int = Field(ge=0, lt=NANOS_PER_SECOND)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistrationTimestamp):
            return NotImplemented
        return (
            self.seconds == other.seconds
            and self.nanoseconds // NANOS_PER_MILLI
            == other.nanoseconds // NANOS_PER_MILLI
        )

    def __hash__(self) -> int:
        return hash((self.seconds, self.nanoseconds // NANOS_PER_MILLI))

    @classmethod
    def _checked(cls, seconds: int, nanoseconds: int) -> "RegistrationTimestamp":
        if not INT64_MIN <= seconds <= INT64_MAX:
            raise TimestampOutOfRangeError("seconds", seconds)
        if not 0 <= nanoseconds < NANOS_PER_SECOND or nanoseconds > INT32_MAX:
            raise TimestampOutOfRangeError("nanoseconds", nanoseconds)
        return cls(seconds=seconds, nanoseconds=nanoseconds)

    @classmethod
    def epoch(cls) -> "RegistrationTimestamp":
        """Return the Unix epoch (0 seconds, 0 nanoseconds)."""
        return cls(seconds=0, nanoseconds=0)

    @classmethod
    def now(cls) -> "RegistrationTimestamp":
        """Return the current UTC time."""
        return cls.from_calendar_time(datetime.now(timezone.utc))

    @classmethod
    def from_calendar_time(cls, value: datetime) -> "RegistrationTimestamp":
        """Decompose a datetime into whole seconds and nanoseconds.

        Naive datetimes are interpreted as UTC.

        Args:
            value: Calendar time to convert

        Returns:
            The equivalent registration timestamp

        Raises:
            TimestampOutOfRangeError: If a component does not fit its width
        """
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)

        # timedelta normalizes to days, seconds in [0, 86400) and
        # microseconds in [0, 1e6), so integer arithmetic stays exact.
        delta = value - _EPOCH
        seconds = delta.days * 86_400 + delta.seconds
        nanoseconds = delta.microseconds * NANOS_PER_MICRO
        return cls._checked(seconds, nanoseconds)

    def to_calendar_time(self) -> datetime:
        """Rebuild a UTC-aware datetime.

        Sub-microsecond nanoseconds are dropped, which makes this the exact
        inverse of from_calendar_time.

        Raises:
            TimestampOutOfRangeError: If the instant is outside the range
                ``datetime`` can represent
        """
        try:
            return _EPOCH + timedelta(
                seconds=self.seconds,
                microseconds=self.nanoseconds // NANOS_PER_MICRO,
            )
        except OverflowError as e:
            raise TimestampOutOfRangeError("seconds", self.seconds) from e

    @classmethod
    def from_native(cls, seconds: int, nanoseconds: int) -> "RegistrationTimestamp":
        """Build from the driver's (seconds, nanoseconds) pair, losslessly."""
        return cls._checked(seconds, nanoseconds)

    def to_native(self) -> NativeTimestamp:
        """Return the driver's (seconds, nanoseconds) pair, losslessly."""
        return NativeTimestamp(self.seconds, self.nanoseconds)

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "RegistrationTimestamp":
        """Build from a CQL timestamp (milliseconds since the epoch)."""
        seconds, millis = divmod(milliseconds, MILLIS_PER_SECOND)
        return cls._checked(seconds, millis * NANOS_PER_MILLI)

    def to_milliseconds(self) -> int:
        """Return the CQL timestamp value (milliseconds since the epoch)."""
        return (
            self.seconds * MILLIS_PER_SECOND + self.nanoseconds // NANOS_PER_MILLI
        )
