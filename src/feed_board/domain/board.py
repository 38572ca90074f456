"""Domain models for boards, horses, feeds and diet entries."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Orientation(StrEnum):
    """Which entity type is laid out across the board columns."""

    HORSE_MAJOR = "horse-major"
    FEED_MAJOR = "feed-major"


class TimeMode(StrEnum):
    """Resolved feeding time shown on the board."""

    AM = "AM"
    PM = "PM"


class ConfiguredTimeMode(StrEnum):
    """Time mode as configured on a board, before AUTO is resolved."""

    AUTO = "AUTO"
    AM = "AM"
    PM = "PM"


@dataclass(frozen=True)
class Horse:
    """A horse on a board."""

    id: str
    board_id: str
    name: str
    note: str | None = None
    note_expiry: datetime | None = None
    archived: bool = False


@dataclass(frozen=True)
class Feed:
    """A feed on a board, ordered by rank."""

    id: str
    board_id: str
    name: str
    unit_type: str = "fraction"
    unit_label: str = "scoop"
    entry_options: str | None = None
    rank: int = 0


@dataclass(frozen=True)
class DietEntry:
    """Dosing of one feed for one horse, split by feeding time."""

    horse_id: str
    feed_id: str
    am_amount: float | None = None
    am_variant: str | None = None
    pm_amount: float | None = None
    pm_variant: str | None = None


@dataclass(frozen=True)
class Board:
    """Display configuration for a board."""

    id: str
    timezone: str = "UTC"
    time_mode: ConfiguredTimeMode = ConfiguredTimeMode.AUTO
    override_until: datetime | None = None
    zoom_level: int = 2
    current_page: int = 0
    orientation: Orientation = Orientation.HORSE_MAJOR
