"""
Unit tests for timestamp parsing and day counting.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.utils.date_utils import (
    DateParsingError,
    days_between,
    ensure_utc,
    parse_timestamp,
    utc_now,
)

UTC_NOON = datetime(2024, 6, 24, 12, 0, tzinfo=timezone.utc)


class TestParseTimestamp:
    """Test suite for parse_timestamp."""

    @pytest.mark.parametrize("value", [
        "2024-06-24T12:00:00Z",
        "2024-06-24T12:00:00+00:00",
        "2024-06-24T14:00:00+02:00",
        "Mon, 24 Jun 2024 12:00:00 +0000",
        "24/06/2024 12:00:00",
    ])
    def test_supported_formats(self, value):
        assert parse_timestamp(value) == UTC_NOON

    def test_date_only(self):
        assert parse_timestamp("24/06/2024") == datetime(2024, 6, 24, tzinfo=timezone.utc)

    def test_surrounding_whitespace(self):
        assert parse_timestamp("  2024-06-24T12:00:00Z ") == UTC_NOON

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_values(self, value):
        assert parse_timestamp(value) is None

    def test_naive_datetime_becomes_utc(self):
        parsed = parse_timestamp(datetime(2024, 6, 24, 12, 0))

        assert parsed == UTC_NOON
        assert parsed.utcoffset() == timedelta(0)

    def test_result_is_always_aware(self):
        assert parse_timestamp("2024-06-24T12:00:00").tzinfo is not None

    def test_unparseable_string(self):
        with pytest.raises(DateParsingError) as excinfo:
            parse_timestamp("not a date")
        assert "not a date" in str(excinfo.value)

    def test_unsupported_type(self):
        with pytest.raises(DateParsingError):
            parse_timestamp(["2024-06-24"])


class TestDaysBetween:
    """Test suite for whole-day differences."""

    def test_exact_days(self):
        assert days_between(UTC_NOON, UTC_NOON + timedelta(days=3)) == 3

    def test_partial_day_rounds_up(self):
        assert days_between(UTC_NOON, UTC_NOON + timedelta(days=2, seconds=1)) == 3

    def test_order_does_not_matter(self):
        later = UTC_NOON + timedelta(days=4, hours=5)
        assert days_between(later, UTC_NOON) == days_between(UTC_NOON, later) == 5

    def test_same_instant(self):
        assert days_between(UTC_NOON, UTC_NOON) == 0

    def test_mixed_naive_and_aware(self):
        assert days_between(datetime(2024, 6, 23, 12, 0), UTC_NOON) == 1


class TestUtcHelpers:

    def test_ensure_utc_converts_offsets(self):
        plus_two = datetime(2024, 6, 24, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert ensure_utc(plus_two).hour == 12

    def test_utc_now_is_aware(self):
        assert utc_now().utcoffset() == timedelta(0)
