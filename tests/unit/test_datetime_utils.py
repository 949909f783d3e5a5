"""
Unit tests for datetime utilities.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from autoscheduler.utils.datetime_utils import (
    at_hour,
    ceil_to_slot,
    ensure_utc,
    normalize_local,
    to_local_datetime,
)

UTC = timezone.utc
NEW_YORK = ZoneInfo("America/New_York")


def test_ensure_utc_assumes_naive_is_utc():
    assert ensure_utc(datetime(2024, 1, 1, 9, 0)) == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
    assert ensure_utc(None) is None


def test_to_local_datetime_keeps_naive_wall_clock():
    local = to_local_datetime(datetime(2024, 1, 1, 9, 0), "America/New_York")

    assert (local.hour, local.minute) == (9, 0)
    assert local == datetime(2024, 1, 1, 14, 0, tzinfo=UTC)


class TestAtHour:
    def test_regular_hour(self):
        assert at_hour(date(2024, 1, 1), 9, "UTC") == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    def test_hour_24_is_next_midnight(self):
        assert at_hour(date(2024, 1, 1), 24, "UTC") == datetime(2024, 1, 2, 0, 0, tzinfo=UTC)

    def test_skipped_hour_moves_forward(self):
        value = at_hour(date(2026, 3, 8), 2, "America/New_York")

        assert value == datetime(2026, 3, 8, 7, 0, tzinfo=UTC)
        assert value.hour == 3


class TestCeilToSlot:
    def test_rounds_up(self):
        value = datetime(2024, 1, 1, 9, 7, 30, tzinfo=UTC)

        assert ceil_to_slot(value) == datetime(2024, 1, 1, 9, 15, tzinfo=UTC)

    def test_aligned_value_kept_unless_strict(self):
        value = datetime(2024, 1, 1, 9, 15, tzinfo=UTC)

        assert ceil_to_slot(value) == value
        assert ceil_to_slot(value, strict=True) == datetime(2024, 1, 1, 9, 30, tzinfo=UTC)

    def test_rounding_into_skipped_hour(self):
        value = datetime(2026, 3, 8, 1, 50, tzinfo=NEW_YORK)

        # 02:00 local does not exist; the next real boundary is 03:00 EDT
        assert ceil_to_slot(value) == datetime(2026, 3, 8, 7, 0, tzinfo=UTC)


def test_normalize_local_leaves_existing_times_alone():
    value = datetime(2026, 3, 8, 4, 0, tzinfo=NEW_YORK)

    assert normalize_local(value) == value
    assert normalize_local(value).hour == 4
