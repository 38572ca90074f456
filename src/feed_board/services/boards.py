"""Board service: renders board pages and manages display settings."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from feed_board.domain.board import (
    Board,
    ConfiguredTimeMode,
    DietEntry,
    Feed,
    Horse,
    Orientation,
    TimeMode,
)
from feed_board.domain.grid import GridOutput, PageCoords
from feed_board.services.feeds import calculate_feed_rankings, cleanup_orphaned_diet
from feed_board.services.grid import compute_grid, get_2d_page_coords
from feed_board.services.notes import NoteStatus, clear_expired_notes, note_status
from feed_board.services.time_mode import (
    calculate_override_expiry,
    get_effective_time_mode,
)

logger = logging.getLogger(__name__)

ZOOM_PAGE_SIZES = {1: 8, 2: 6, 3: 4}
DEFAULT_ROW_PAGE_SIZE = 10


class BoardRepository(Protocol):
    """Persistence interface for boards and their entities."""

    def get_board(self, board_id: str) -> Board | None:
        """Return a board by id, if present."""

    def list_horses(self, board_id: str) -> list[Horse]:
        """Return the horses of a board in display order."""

    def list_feeds(self, board_id: str) -> list[Feed]:
        """Return the feeds of a board."""

    def list_diet(self, board_id: str) -> list[DietEntry]:
        """Return the diet entries for horses of a board."""

    def update_board(self, board_id: str, payload: dict[str, object]) -> Board:
        """Update board settings and return the board."""

    def update_horse_note(
        self, horse_id: str, note: str | None, note_expiry: datetime | None
    ) -> None:
        """Update the note on a horse."""

    def update_feed_rank(self, feed_id: str, rank: int) -> None:
        """Update the rank of a feed."""


@dataclass
class BoardPage:
    """One linear page of a board, ready to render."""

    board_id: str
    page_index: int
    total_pages: int
    coords: PageCoords
    orientation: Orientation
    time_mode: TimeMode
    grid: GridOutput
    notes: dict[str, NoteStatus] = field(default_factory=dict)


def page_size_for_zoom(zoom_level: int) -> int:
    """Return how many columns fit on the board at a zoom level."""
    return ZOOM_PAGE_SIZES.get(zoom_level, ZOOM_PAGE_SIZES[2])


@dataclass
class BoardService:
    """Application service for board display."""

    repository: BoardRepository
    row_page_size: int = DEFAULT_ROW_PAGE_SIZE

    def render_page(
        self,
        board_id: str,
        page_index: int | None = None,
        now: datetime | None = None,
    ) -> BoardPage | None:
        """Render a linear page, defaulting to the board's current page.

        Row pages of a column page are visited before moving to the next
        column page. Each column page has its own number of row pages since
        rows are filtered against the visible columns.
        """
        board = self.repository.get_board(board_id)
        if board is None:
            return None
        horses = self.repository.list_horses(board_id)
        feeds = self.repository.list_feeds(board_id)
        diet = cleanup_orphaned_diet(
            self.repository.list_diet(board_id), horses, feeds
        )
        current = now or datetime.now(tz=UTC)
        time_mode = get_effective_time_mode(
            board.time_mode, board.override_until, board.timezone, current
        )
        index = board.current_page if page_index is None else page_index
        page_size = page_size_for_zoom(board.zoom_level)

        def grid_at(coords: PageCoords) -> GridOutput:
            return compute_grid(
                horses,
                feeds,
                diet,
                orientation=board.orientation,
                time_mode=time_mode,
                page=coords.column_page,
                page_size=page_size,
                row_page=coords.row_page,
                row_page_size=self.row_page_size,
            )

        first = grid_at(PageCoords(column_page=0, row_page=0))
        row_pages = [first.total_row_pages]
        for column_page in range(1, first.total_column_pages):
            row_pages.append(grid_at(PageCoords(column_page, 0)).total_row_pages)

        coords = _locate(index, row_pages)
        grid = grid_at(coords)
        visible = {item.id for item in (*grid.columns, *grid.rows)}
        return BoardPage(
            board_id=board_id,
            page_index=index,
            total_pages=sum(row_pages),
            coords=coords,
            orientation=board.orientation,
            time_mode=time_mode,
            grid=grid,
            notes={
                horse.id: note_status(horse, current)
                for horse in horses
                if horse.id in visible and horse.note is not None
            },
        )

    def change_page(self, board_id: str, delta: int) -> Board | None:
        """Move the board's current page by delta, never below zero."""
        board = self.repository.get_board(board_id)
        if board is None:
            return None
        page = max(0, board.current_page + delta)
        return self.repository.update_board(board_id, {"current_page": page})

    def set_orientation(
        self, board_id: str, orientation: Orientation
    ) -> Board | None:
        """Change the board orientation and go back to the first page."""
        if self.repository.get_board(board_id) is None:
            return None
        return self.repository.update_board(
            board_id, {"orientation": orientation, "current_page": 0}
        )

    def set_time_mode(
        self,
        board_id: str,
        mode: ConfiguredTimeMode,
        now: datetime | None = None,
    ) -> Board | None:
        """Force AM or PM for an hour, or return the board to AUTO."""
        if self.repository.get_board(board_id) is None:
            return None
        override_until = (
            None if mode == ConfiguredTimeMode.AUTO else calculate_override_expiry(now)
        )
        return self.repository.update_board(
            board_id, {"time_mode": mode, "override_until": override_until}
        )

    def expire_notes(self, board_id: str, now: datetime | None = None) -> int | None:
        """Clear expired horse notes and return how many were cleared."""
        if self.repository.get_board(board_id) is None:
            return None
        horses = self.repository.list_horses(board_id)
        updated, cleared = clear_expired_notes(horses, now or datetime.now(tz=UTC))
        for before, after in zip(horses, updated, strict=True):
            if before.note != after.note or before.note_expiry != after.note_expiry:
                self.repository.update_horse_note(after.id, None, None)
        if cleared:
            logger.info(
                "Cleared expired notes",
                extra={"board_id": board_id, "cleared": cleared},
            )
        return cleared

    def recalculate_rankings(self, board_id: str) -> list[Feed] | None:
        """Re-rank feeds by usage and persist ranks that changed."""
        if self.repository.get_board(board_id) is None:
            return None
        horses = self.repository.list_horses(board_id)
        feeds = self.repository.list_feeds(board_id)
        diet = cleanup_orphaned_diet(
            self.repository.list_diet(board_id), horses, feeds
        )
        ranked = calculate_feed_rankings(feeds, horses, diet)
        previous = {feed.id: feed.rank for feed in feeds}
        for feed in ranked:
            if previous[feed.id] != feed.rank:
                self.repository.update_feed_rank(feed.id, feed.rank)
        return ranked


def _locate(page_index: int, row_pages: list[int]) -> PageCoords:
    """Map a linear page index onto per-column-page row page counts."""
    if len(set(row_pages)) == 1:
        return get_2d_page_coords(page_index, row_pages[0])
    remaining = page_index
    for column_page, count in enumerate(row_pages):
        if remaining < count:
            return PageCoords(column_page=column_page, row_page=remaining)
        remaining -= count
    return PageCoords(column_page=len(row_pages), row_page=0)
