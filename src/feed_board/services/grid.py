"""Grid layout and pagination for the feed board.

The board is laid out as a primary axis (columns) and a secondary axis (rows).
Columns are paginated first; the rows are then derived sparsely from the diet
entries that are active against the visible columns only, and paginated in
turn. Changing the column page can therefore change which rows exist.
"""

import math
from collections.abc import Sequence

from feed_board.domain.board import DietEntry, Feed, Horse, Orientation, TimeMode
from feed_board.domain.grid import GridCell, GridItem, GridOutput, PageCoords

_EMPTY_CELL = GridCell(value=None, variant=None)


def is_entry_active(entry: DietEntry, time_mode: TimeMode) -> bool:
    """Return True when the entry doses anything at the given feeding time."""
    amount, variant = _dose_for(entry, time_mode)
    return bool(amount) or variant is not None


def compute_grid(  # noqa: PLR0913
    horses: Sequence[Horse],
    feeds: Sequence[Feed],
    diet: Sequence[DietEntry],
    orientation: Orientation,
    time_mode: TimeMode,
    page: int,
    page_size: float,
    row_page: int = 0,
    row_page_size: float = math.inf,
) -> GridOutput:
    """Compute the visible grid for one column page and one row page."""
    assert page >= 0 and row_page >= 0, "page indexes must be non-negative"
    assert page_size > 0 and row_page_size > 0, "page sizes must be positive"

    active_horses = [horse for horse in horses if not horse.archived]
    ranked_feeds = sorted(feeds, key=lambda feed: feed.rank)
    horse_major = orientation == Orientation.HORSE_MAJOR
    primary: list[Horse] | list[Feed]
    secondary: list[Horse] | list[Feed]
    if horse_major:
        primary, secondary = active_horses, ranked_feeds
    else:
        primary, secondary = ranked_feeds, active_horses

    columns = _page_slice(primary, page, page_size)
    total_column_pages = _total_pages(len(primary), page_size)

    active: dict[tuple[str, str], DietEntry] = {}
    for entry in diet:
        if is_entry_active(entry, time_mode):
            active.setdefault((entry.horse_id, entry.feed_id), entry)

    visible_ids = {item.id for item in columns}
    relevant_ids: set[str] = set()
    for horse_id, feed_id in active:
        primary_id, secondary_id = (
            (horse_id, feed_id) if horse_major else (feed_id, horse_id)
        )
        if primary_id in visible_ids:
            relevant_ids.add(secondary_id)
    sparse_rows = [item for item in secondary if item.id in relevant_ids]

    rows = _page_slice(sparse_rows, row_page, row_page_size)
    total_row_pages = _total_pages(len(sparse_rows), row_page_size)
    shown_through = (row_page + 1) * row_page_size
    remaining_rows = (
        int(len(sparse_rows) - shown_through)
        if shown_through < len(sparse_rows)
        else 0
    )

    cells = []
    for column in columns:
        column_cells = []
        for row in rows:
            key = (column.id, row.id) if horse_major else (row.id, column.id)
            entry = active.get(key)
            if entry is None:
                column_cells.append(_EMPTY_CELL)
                continue
            value, variant = _dose_for(entry, time_mode)
            column_cells.append(GridCell(value=value, variant=variant))
        cells.append(column_cells)

    return GridOutput(
        columns=[_to_item(column) for column in columns],
        rows=[_to_item(row) for row in rows],
        cells=cells,
        total_column_pages=total_column_pages,
        total_row_pages=total_row_pages,
        has_more_rows=remaining_rows > 0,
        remaining_rows=remaining_rows,
    )


def get_total_2d_pages(total_column_pages: int, total_row_pages: int) -> int:
    """Return the number of linear pages across both axes."""
    return total_column_pages * total_row_pages


def get_2d_page_coords(linear_index: int, total_row_pages: int) -> PageCoords:
    """Map a linear page index to (column page, row page), rows advancing first."""
    return PageCoords(
        column_page=linear_index // total_row_pages,
        row_page=linear_index % total_row_pages,
    )


def get_linear_page_index(coords: PageCoords, total_row_pages: int) -> int:
    """Inverse of get_2d_page_coords."""
    return coords.column_page * total_row_pages + coords.row_page


def _dose_for(
    entry: DietEntry, time_mode: TimeMode
) -> tuple[float | None, str | None]:
    if time_mode == TimeMode.AM:
        return entry.am_amount, entry.am_variant
    return entry.pm_amount, entry.pm_variant


def _total_pages(count: int, size: float) -> int:
    return max(1, math.ceil(count / size))


def _page_slice(items: list, page: int, size: float) -> list:
    if math.isinf(size):
        return list(items) if page == 0 else []
    start = page * int(size)
    return items[start : start + int(size)]


def _to_item(entity: Horse | Feed) -> GridItem:
    if isinstance(entity, Horse):
        return GridItem(
            id=entity.id,
            name=entity.name,
            note=entity.note,
            note_expiry=entity.note_expiry,
        )
    return GridItem(
        id=entity.id,
        name=entity.name,
        unit_type=entity.unit_type,
        unit_label=entity.unit_label,
        entry_options=entity.entry_options,
    )
