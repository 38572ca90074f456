"""Pydantic models for board API payloads."""

from datetime import datetime

from pydantic import BaseModel, Field

from feed_board.domain.board import (
    ConfiguredTimeMode,
    DietEntry,
    Feed,
    Horse,
    Orientation,
    TimeMode,
)


class HorsePayload(BaseModel):
    """Horse in a board snapshot."""

    id: str
    board_id: str
    name: str
    note: str | None = None
    note_expiry: datetime | None = None
    archived: bool = False

    def to_domain(self) -> Horse:
        return Horse(**self.model_dump())


class FeedPayload(BaseModel):
    """Feed in a board snapshot."""

    id: str
    board_id: str
    name: str
    unit_type: str = "fraction"
    unit_label: str = "scoop"
    entry_options: str | None = None
    rank: int = Field(default=0, ge=0)

    def to_domain(self) -> Feed:
        return Feed(**self.model_dump())


class DietEntryPayload(BaseModel):
    """Diet entry in a board snapshot."""

    horse_id: str
    feed_id: str
    am_amount: float | None = Field(default=None, ge=0)
    am_variant: str | None = None
    pm_amount: float | None = Field(default=None, ge=0)
    pm_variant: str | None = None

    def to_domain(self) -> DietEntry:
        return DietEntry(**self.model_dump())


class GridRequest(BaseModel):
    """Snapshot and view configuration for a stateless grid computation.

    A missing page size means the axis is not paginated.
    """

    horses: list[HorsePayload] = Field(default_factory=list)
    feeds: list[FeedPayload] = Field(default_factory=list)
    diet: list[DietEntryPayload] = Field(default_factory=list)
    orientation: Orientation = Orientation.HORSE_MAJOR
    time_mode: TimeMode
    page: int = Field(default=0, ge=0)
    page_size: int | None = Field(default=None, gt=0)
    row_page: int = Field(default=0, ge=0)
    row_page_size: int | None = Field(default=None, gt=0)


class PageChange(BaseModel):
    """Relative page navigation."""

    delta: int


class TimeModeChange(BaseModel):
    """Requested time mode for a board."""

    time_mode: ConfiguredTimeMode


class OrientationChange(BaseModel):
    """Requested orientation for a board."""

    orientation: Orientation
