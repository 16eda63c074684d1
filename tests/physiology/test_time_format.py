"""Tests for pace and duration string conversions.

Covers:
- Flooring to whole seconds (never rounding up)
- Float noise absorbed before flooring
- "M:SS" round trip
- Malformed input handling
"""

import pytest

from marathon_coach.physiology.time_format import (
    NO_PACE,
    format_duration,
    format_minutes,
    pace_to_seconds,
    parse_time_to_minutes,
    seconds_to_pace,
)


def test_seconds_to_pace_floors():
    assert seconds_to_pace(515.7) == "8:35"
    assert seconds_to_pace(539.99) == "8:59"


def test_seconds_to_pace_absorbs_float_noise():
    # 7.1 * 60 == 425.99999999999994
    assert seconds_to_pace(7.1 * 60) == "7:06"


def test_seconds_to_pace_pads_seconds():
    assert seconds_to_pace(0) == "0:00"
    assert seconds_to_pace(605) == "10:05"


def test_pace_round_trip_for_every_second_of_a_minute():
    """seconds_to_pace(pace_to_seconds(p)) == p for well-formed paces."""
    for mins in (0, 4, 9, 12):
        for secs in range(60):
            pace = f"{mins}:{secs:02d}"
            assert seconds_to_pace(pace_to_seconds(pace)) == pace


@pytest.mark.parametrize("pace", [None, "", NO_PACE, "abc", "8:xx", "1:02:03"])
def test_pace_to_seconds_rejects_non_paces(pace):
    assert pace_to_seconds(pace) is None


def test_parse_time_to_minutes():
    assert parse_time_to_minutes("22:30") == pytest.approx(22.5)
    assert parse_time_to_minutes("1:45:30") == pytest.approx(105.5)


@pytest.mark.parametrize("value", [None, "", "fast", "1:2:3:4"])
def test_parse_time_to_minutes_malformed_is_zero(value):
    assert parse_time_to_minutes(value) == 0.0


def test_format_minutes():
    assert format_minutes(22.5) == "22:30"


def test_format_duration():
    assert format_duration(59) == "0:59"
    assert format_duration(600) == "10:00"
    assert format_duration(3725) == "1:02:05"
