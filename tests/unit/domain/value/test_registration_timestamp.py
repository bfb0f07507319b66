"""Unit tests for RegistrationTimestamp."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from identity_store.domain.error import TimestampOutOfRangeError
from identity_store.domain.value import NativeTimestamp, RegistrationTimestamp


class TestFromCalendarTime:
    """Tests for RegistrationTimestamp.from_calendar_time()."""

    def test_decomposes_into_seconds_and_nanoseconds(self):
        """Whole seconds and sub-second nanoseconds are split exactly."""
        dt = datetime(2021, 3, 4, 5, 6, 7, 123456, tzinfo=timezone.utc)

        ts = RegistrationTimestamp.from_calendar_time(dt)

        assert ts.seconds == 1614834367
        assert ts.nanoseconds == 123_456_000

    def test_naive_datetime_is_utc(self):
        """Naive datetimes are interpreted as UTC."""
        aware = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        naive = datetime(2021, 3, 4, 5, 6, 7)

        assert RegistrationTimestamp.from_calendar_time(
            naive
        ) == RegistrationTimestamp.from_calendar_time(aware)

    def test_other_timezones_are_normalized(self):
        """The same instant in another offset yields the same timestamp."""
        utc = datetime(2021, 3, 4, 5, 0, 0, tzinfo=timezone.utc)
        plus_two = datetime(2021, 3, 4, 7, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        a = RegistrationTimestamp.from_calendar_time(utc)
        b = RegistrationTimestamp.from_calendar_time(plus_two)

        assert (a.seconds, a.nanoseconds) == (b.seconds, b.nanoseconds)

    def test_pre_epoch_keeps_nanoseconds_non_negative(self):
        """Before 1970 the seconds go negative, never the nanoseconds."""
        dt = datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc)

        ts = RegistrationTimestamp.from_calendar_time(dt)

        assert ts.seconds == -1
        assert ts.nanoseconds == 500_000_000

    def test_round_trips_at_full_precision(self):
        """to_calendar_time inverts from_calendar_time exactly."""
        dt = datetime(2030, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)

        assert RegistrationTimestamp.from_calendar_time(dt).to_calendar_time() == dt


class TestNative:
    """Tests for the native (seconds, nanoseconds) conversions."""

    def test_native_round_trip_is_lossless(self):
        """Nanoseconds survive from_native/to_native untouched."""
        ts = RegistrationTimestamp.from_native(1_600_000_000, 123_456_789)

        assert ts.to_native() == NativeTimestamp(1_600_000_000, 123_456_789)
        assert ts.nanoseconds == 123_456_789

    @pytest.mark.parametrize("nanoseconds", [-1, 1_000_000_000, 2**31])
    def test_nanoseconds_out_of_range(self, nanoseconds):
        """Sub-second values outside [0, 1e9) are rejected."""
        with pytest.raises(TimestampOutOfRangeError) as exc_info:
            RegistrationTimestamp.from_native(0, nanoseconds)

        assert exc_info.value.component == "nanoseconds"

    @pytest.mark.parametrize("seconds", [2**63, -(2**63) - 1])
    def test_seconds_out_of_range(self, seconds):
        """Seconds must fit in a signed 64-bit integer."""
        with pytest.raises(TimestampOutOfRangeError) as exc_info:
            RegistrationTimestamp.from_native(seconds, 0)

        assert exc_info.value.component == "seconds"

    def test_direct_construction_is_validated(self):
        """Constructing with out-of-range fields fails validation."""
        with pytest.raises(ValidationError):
            RegistrationTimestamp(seconds=0, nanoseconds=1_000_000_000)


class TestMilliseconds:
    """Tests for the CQL millisecond conversions."""

    def test_to_milliseconds_truncates_sub_millisecond(self):
        """Only whole milliseconds are kept."""
        ts = RegistrationTimestamp.from_native(12, 345_678_901)

        assert ts.to_milliseconds() == 12_345

    def test_from_milliseconds(self):
        """Milliseconds split into seconds and nanoseconds."""
        ts = RegistrationTimestamp.from_milliseconds(12_345)

        assert ts.to_native() == NativeTimestamp(12, 345_000_000)

    def test_negative_milliseconds(self):
        """Pre-epoch milliseconds keep nanoseconds non-negative."""
        ts = RegistrationTimestamp.from_milliseconds(-1)

        assert ts.to_native() == NativeTimestamp(-1, 999_000_000)

    def test_millisecond_column_round_trip_is_equal(self):
        """A value stored at millisecond precision still compares equal."""
        original = RegistrationTimestamp.from_native(1_700_000_000, 987_654_321)

        stored = RegistrationTimestamp.from_milliseconds(original.to_milliseconds())

        assert stored == original


class TestEquality:
    """Tests for millisecond-granularity equality."""

    def test_sub_millisecond_jitter_is_equal(self):
        """Timestamps within the same millisecond are equal."""
        a = RegistrationTimestamp.from_native(100, 5_000_001)
        b = RegistrationTimestamp.from_native(100, 5_999_999)

        assert a == b
        assert hash(a) == hash(b)

    def test_different_milliseconds_are_not_equal(self):
        """A millisecond apart is a different instant."""
        a = RegistrationTimestamp.from_native(100, 5_999_999)
        b = RegistrationTimestamp.from_native(100, 6_000_000)

        assert a != b

    def test_different_seconds_are_not_equal(self):
        """Seconds are always compared."""
        assert RegistrationTimestamp.from_native(
            100, 0
        ) != RegistrationTimestamp.from_native(101, 0)

    def test_not_equal_to_other_types(self):
        """Comparing against a tuple does not pretend equality."""
        ts = RegistrationTimestamp.from_native(1, 0)

        assert ts != (1, 0)


class TestDefaults:
    """Tests for epoch() and now()."""

    def test_epoch(self):
        """The epoch is (0, 0)."""
        assert RegistrationTimestamp.epoch().to_native() == NativeTimestamp(0, 0)

    def test_now_is_current_utc_time(self):
        """now() lies between two surrounding wall-clock reads."""
        before = datetime.now(timezone.utc)
        ts = RegistrationTimestamp.now()
        after = datetime.now(timezone.utc)

        assert before <= ts.to_calendar_time() <= after

    def test_to_calendar_time_outside_datetime_range(self):
        """Instants datetime cannot hold raise instead of wrapping."""
        ts = RegistrationTimestamp.from_native(2**62, 0)

        with pytest.raises(TimestampOutOfRangeError):
            ts.to_calendar_time()
