"""Tests for HH:MM conversion helpers."""

import pytest

from dayweaver.engine.timeutils import time_to_minutes, minutes_to_time, add_minutes


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("24:00") == 1440


@pytest.mark.parametrize("value", ["9", "09:60", "25:00", "24:01", "ab:cd", "", "09:30:00", None])
def test_time_to_minutes_rejects_malformed(value):
    with pytest.raises(ValueError):
        time_to_minutes(value)


def test_minutes_to_time():
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(570) == "09:30"
    assert minutes_to_time(1440) == "24:00"


@pytest.mark.parametrize("value", [-1, 1441])
def test_minutes_to_time_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        minutes_to_time(value)


def test_add_minutes():
    assert add_minutes("09:45", 30) == "10:15"
    assert add_minutes("23:30", 30) == "24:00"
