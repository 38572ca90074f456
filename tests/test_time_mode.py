"""Tests for time mode resolution."""

from datetime import UTC, datetime, timedelta

from feed_board.domain.board import ConfiguredTimeMode, TimeMode
from feed_board.services.time_mode import (
    calculate_override_expiry,
    get_effective_time_mode,
    get_hour_in_timezone,
    get_time_mode_for_hour,
    is_override_expired,
)


def test_time_mode_for_hour_boundaries() -> None:
    assert [get_time_mode_for_hour(hour) for hour in (4, 7, 11)] == [TimeMode.AM] * 3
    assert [get_time_mode_for_hour(hour) for hour in (12, 15, 23)] == [TimeMode.PM] * 3
    assert [get_time_mode_for_hour(hour) for hour in (0, 1, 3)] == [TimeMode.PM] * 3


def test_hour_in_timezone() -> None:
    moment = datetime(2024, 6, 15, 14, 0, tzinfo=UTC)

    assert get_hour_in_timezone(moment, "UTC") == 14
    assert get_hour_in_timezone(moment, "Australia/Sydney") == 0


def test_hour_in_unknown_timezone_falls_back_to_utc() -> None:
    moment = datetime(2024, 6, 15, 14, 30, tzinfo=UTC)

    assert get_hour_in_timezone(moment, "Invalid/Timezone") == 14


def test_auto_mode_follows_clock() -> None:
    morning = datetime(2024, 6, 15, 8, 0, tzinfo=UTC)
    afternoon = datetime(2024, 6, 15, 15, 0, tzinfo=UTC)
    late_night = datetime(2024, 6, 15, 2, 0, tzinfo=UTC)

    auto = ConfiguredTimeMode.AUTO
    assert get_effective_time_mode(auto, None, "UTC", morning) == TimeMode.AM
    assert get_effective_time_mode(auto, None, "UTC", afternoon) == TimeMode.PM
    assert get_effective_time_mode(auto, None, "UTC", late_night) == TimeMode.PM


def test_active_override_wins() -> None:
    now = datetime(2024, 6, 15, 15, 0, tzinfo=UTC)
    until = now + timedelta(hours=1)

    result = get_effective_time_mode(ConfiguredTimeMode.AM, until, "UTC", now)

    assert result == TimeMode.AM


def test_expired_or_missing_override_falls_back_to_clock() -> None:
    now = datetime(2024, 6, 15, 15, 0, tzinfo=UTC)
    morning = datetime(2024, 6, 15, 8, 0, tzinfo=UTC)

    expired = get_effective_time_mode(
        ConfiguredTimeMode.AM, now - timedelta(hours=1), "UTC", now
    )
    missing = get_effective_time_mode(ConfiguredTimeMode.PM, None, "UTC", morning)

    assert expired == TimeMode.PM
    assert missing == TimeMode.AM


def test_override_expiry_is_one_hour_later() -> None:
    now = datetime(2024, 6, 15, 10, 0, tzinfo=UTC)

    assert calculate_override_expiry(now) == datetime(2024, 6, 15, 11, 0, tzinfo=UTC)


def test_is_override_expired() -> None:
    now = datetime(2024, 6, 15, 15, 0, tzinfo=UTC)

    assert is_override_expired(None, now) is True
    assert is_override_expired(now - timedelta(minutes=1), now) is True
    assert is_override_expired(now, now) is True
    assert is_override_expired(now + timedelta(minutes=1), now) is False
