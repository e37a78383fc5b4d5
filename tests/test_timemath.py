from __future__ import annotations

from datetime import time

import pytest

from carelog.timemath import (
    duration_minutes,
    format_minutes,
    format_time_of_day,
    parse_time_of_day,
)


def test_duration_minutes_basic() -> None:
    assert duration_minutes("09:00", "10:30") == 90


def test_duration_minutes_rejects_negative() -> None:
    assert duration_minutes("10:00", "09:00") is None


def test_duration_minutes_missing_side() -> None:
    assert duration_minutes(None, "09:00") is None
    assert duration_minutes("09:00", None) is None
    assert duration_minutes("", "09:00") is None


def test_duration_minutes_floors_seconds() -> None:
    assert duration_minutes("09:00:00", "09:45:30") == 45


def test_duration_minutes_mixed_formats_and_time_objects() -> None:
    assert duration_minutes("09:00", "09:30:59") == 30
    assert duration_minutes(time(8, 0), "08:15") == 15


def test_duration_minutes_zero_length() -> None:
    assert duration_minutes("12:00", "12:00") == 0


@pytest.mark.parametrize("bad", ["noon", "25:00", "12:61", "12-00"])
def test_duration_minutes_unparseable_is_none(bad: str) -> None:
    assert duration_minutes(bad, "13:00") is None


def test_parse_time_of_day() -> None:
    assert parse_time_of_day("07:05") == time(7, 5)
    assert parse_time_of_day(" 07:05:09 ") == time(7, 5, 9)
    assert parse_time_of_day("   ") is None
    assert parse_time_of_day("abc") is None


def test_format_time_of_day() -> None:
    assert format_time_of_day("14:30:00") == "14:30"
    assert format_time_of_day("14:30") == "14:30"
    assert format_time_of_day(time(9, 5, 1)) == "09:05"
    assert format_time_of_day(None) is None
    assert format_time_of_day("") is None


def test_format_minutes() -> None:
    assert format_minutes(90) == "1:30"
    assert format_minutes(5) == "0:05"
    assert format_minutes(0) == "0:00"
    assert format_minutes(None) == ""
