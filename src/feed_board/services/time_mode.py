"""Resolution of the AM/PM feeding time shown on a board."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from feed_board.domain.board import ConfiguredTimeMode, TimeMode

AM_START_HOUR = 4
PM_START_HOUR = 12
OVERRIDE_DURATION = timedelta(hours=1)


def get_time_mode_for_hour(hour: int) -> TimeMode:
    """Return AM for 04:00-11:59 and PM for the rest of the day."""
    if AM_START_HOUR <= hour < PM_START_HOUR:
        return TimeMode.AM
    return TimeMode.PM


def get_hour_in_timezone(moment: datetime, timezone_name: str) -> int:
    """Return the hour of the moment in the timezone, falling back to UTC."""
    try:
        tz = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = UTC
    return moment.astimezone(tz).hour


def get_effective_time_mode(
    configured: ConfiguredTimeMode,
    override_until: datetime | None,
    timezone_name: str,
    now: datetime | None = None,
) -> TimeMode:
    """Resolve the configured mode, honoring an unexpired manual override."""
    current = now or datetime.now(tz=UTC)
    if configured != ConfiguredTimeMode.AUTO and not is_override_expired(
        override_until, current
    ):
        return TimeMode(configured.value)
    return get_time_mode_for_hour(get_hour_in_timezone(current, timezone_name))


def calculate_override_expiry(now: datetime | None = None) -> datetime:
    """Return when a manual override set now should lapse."""
    return (now or datetime.now(tz=UTC)) + OVERRIDE_DURATION


def is_override_expired(
    override_until: datetime | None, now: datetime | None = None
) -> bool:
    """Return True when there is no override or it has lapsed."""
    if override_until is None:
        return True
    return override_until <= (now or datetime.now(tz=UTC))
