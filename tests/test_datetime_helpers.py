"""
Tests for time-window utilities and instant parsing/formatting.
"""

import pytest
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from utils.datetime_helpers import (
    TimeWindow, overlaps, standard_checkout, parse_instant,
    to_utc_iso, from_storage, format_local
)
from utils.errors import ValidationError

LIMA = ZoneInfo('America/Lima')


def lima(*args):
    return datetime(*args, tzinfo=LIMA)


class TestOverlaps:
    """Tests for the open-interval overlap rule."""

    def test_overlapping_windows(self):
        a = TimeWindow(lima(2024, 1, 1, 10), lima(2024, 1, 1, 13))
        b = TimeWindow(lima(2024, 1, 1, 12), lima(2024, 1, 1, 14))
        assert overlaps(a, b) is True
        assert overlaps(b, a) is True

    def test_touching_endpoints_do_not_overlap(self):
        a = TimeWindow(lima(2024, 1, 1, 10), lima(2024, 1, 1, 13))
        b = TimeWindow(lima(2024, 1, 1, 13), lima(2024, 1, 1, 15))
        assert overlaps(a, b) is False
        assert overlaps(b, a) is False

    def test_containment_overlaps(self):
        outer = TimeWindow(lima(2024, 1, 1, 8), lima(2024, 1, 1, 20))
        inner = TimeWindow(lima(2024, 1, 1, 10), lima(2024, 1, 1, 11))
        assert overlaps(outer, inner) is True
        assert overlaps(inner, outer) is True

    def test_disjoint_windows(self):
        a = TimeWindow(lima(2024, 1, 1, 8), lima(2024, 1, 1, 9))
        b = TimeWindow(lima(2024, 1, 2, 8), lima(2024, 1, 2, 9))
        assert overlaps(a, b) is False


class TestStandardCheckout:
    """Tests for the 12:59 front-desk checkout rule."""

    def test_late_night_checks_out_same_day(self):
        assert standard_checkout(lima(2024, 1, 1, 3, 0), LIMA) == lima(2024, 1, 1, 12, 59)

    def test_midnight_checks_out_same_day(self):
        assert standard_checkout(lima(2024, 1, 1, 0, 0), LIMA) == lima(2024, 1, 1, 12, 59)

    def test_hour_five_boundary(self):
        """05:59 is still late night; 06:00 is not."""
        assert standard_checkout(lima(2024, 1, 1, 5, 59), LIMA) == lima(2024, 1, 1, 12, 59)
        assert standard_checkout(lima(2024, 1, 1, 6, 0), LIMA) == lima(2024, 1, 2, 12, 59)

    def test_evening_checks_out_next_day(self):
        assert standard_checkout(lima(2024, 1, 1, 23, 30), LIMA) == lima(2024, 1, 2, 12, 59)

    def test_month_rollover(self):
        assert standard_checkout(lima(2024, 1, 31, 14, 0), LIMA) == lima(2024, 2, 1, 12, 59)

    def test_uses_business_timezone_not_input_offset(self):
        """08:00 UTC is 03:00 in Lima, so the checkout is the same Lima day."""
        check_in = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
        assert standard_checkout(check_in, LIMA) == lima(2024, 1, 1, 12, 59)

    def test_seconds_are_zero(self):
        result = standard_checkout(lima(2024, 1, 1, 10, 17, 45), LIMA)
        assert (result.hour, result.minute, result.second) == (12, 59, 0)


class TestParseInstant:
    """Tests for ISO-8601 parsing."""

    def test_utc_z_suffix(self):
        parsed = parse_instant('2024-01-01T15:00:00Z', LIMA)
        assert parsed == datetime(2024, 1, 1, 15, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_instant('2024-01-01T10:00:00-05:00', LIMA)
        assert parsed == datetime(2024, 1, 1, 15, tzinfo=timezone.utc)

    def test_naive_is_business_local(self):
        parsed = parse_instant('2024-01-01T10:00:00', LIMA)
        assert parsed == lima(2024, 1, 1, 10)

    def test_microseconds_dropped(self):
        parsed = parse_instant('2024-01-01T10:00:00.750Z', LIMA)
        assert parsed.microsecond == 0

    @pytest.mark.parametrize('value', [
        '', None, 'mañana', '2024-13-01T10:00:00Z', 12345,
        '9999-12-31T23:00:00-05:00', '9999-12-31T20:00:00', '0001-01-01T00:00:00+05:00'
    ])
    def test_invalid_values(self, value):
        with pytest.raises(ValidationError):
            parse_instant(value, LIMA)


class TestFormatting:
    """Tests for storage and display formatting."""

    def test_to_utc_iso(self):
        assert to_utc_iso(lima(2024, 1, 1, 10)) == '2024-01-01T15:00:00Z'

    def test_from_storage(self):
        assert from_storage('2024-01-01T15:00:00Z') == datetime(2024, 1, 1, 15, tzinfo=timezone.utc)

    def test_none_passthrough(self):
        assert to_utc_iso(None) is None
        assert from_storage(None) is None

    def test_format_local(self):
        instant = datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc)
        assert format_local(instant, LIMA) == '01/01/2024 03:00 PM'
