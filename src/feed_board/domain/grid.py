"""Domain models for the rendered board grid."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GridItem:
    """A column or row header: a horse or a feed."""

    id: str
    name: str
    note: str | None = None
    note_expiry: datetime | None = None
    unit_type: str | None = None
    unit_label: str | None = None
    entry_options: str | None = None


@dataclass(frozen=True)
class GridCell:
    """Amount and variant for one horse/feed pair."""

    value: float | None = None
    variant: str | None = None


@dataclass(frozen=True)
class GridOutput:
    """Visible slice of the board, with cells indexed [column][row]."""

    columns: list[GridItem]
    rows: list[GridItem]
    cells: list[list[GridCell]]
    total_column_pages: int
    total_row_pages: int
    has_more_rows: bool
    remaining_rows: int


@dataclass(frozen=True)
class PageCoords:
    """Column and row page for a linear page index."""

    column_page: int
    row_page: int
