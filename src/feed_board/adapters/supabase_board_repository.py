"""Supabase-backed board repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from supabase import Client

from feed_board.domain.board import (
    Board,
    ConfiguredTimeMode,
    DietEntry,
    Feed,
    Horse,
    Orientation,
)
from feed_board.services.boards import BoardRepository

_BOARD_COLUMNS = (
    "id, timezone, time_mode, override_until, zoom_level, current_page, orientation"
)
_HORSE_COLUMNS = "id, board_id, name, note, note_expiry, archived"
_FEED_COLUMNS = "id, board_id, name, unit_type, unit_label, entry_options, rank"
_DIET_COLUMNS = (
    "horse_id, feed_id, am_amount, am_variant, pm_amount, pm_variant, "
    "horses!inner(board_id)"
)


@dataclass
class SupabaseBoardRepository(BoardRepository):
    """Supabase implementation for board persistence."""

    client: Client

    def get_board(self, board_id: str) -> Board | None:
        """Return a board by id, if present."""
        response = (
            self.client.table("boards")
            .select(_BOARD_COLUMNS)
            .eq("id", board_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_board(response.data[0])

    def list_horses(self, board_id: str) -> list[Horse]:
        """Return the horses of a board in creation order."""
        response = (
            self.client.table("horses")
            .select(_HORSE_COLUMNS)
            .eq("board_id", board_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_horse(row) for row in response.data or []]

    def list_feeds(self, board_id: str) -> list[Feed]:
        """Return the feeds of a board."""
        response = (
            self.client.table("feeds")
            .select(_FEED_COLUMNS)
            .eq("board_id", board_id)
            .order("rank", desc=False)
            .execute()
        )
        return [_parse_feed(row) for row in response.data or []]

    def list_diet(self, board_id: str) -> list[DietEntry]:
        """Return diet entries for the horses of a board."""
        response = (
            self.client.table("diet_entries")
            .select(_DIET_COLUMNS)
            .eq("horses.board_id", board_id)
            .execute()
        )
        return [_parse_diet(row) for row in response.data or []]

    def update_board(self, board_id: str, payload: dict[str, object]) -> Board:
        """Update board settings and return the stored board."""
        values = {key: _to_column(value) for key, value in payload.items()}
        values["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("boards").update(values).eq("id", board_id).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update board in Supabase")
        return _parse_board(response.data[0])

    def update_horse_note(
        self, horse_id: str, note: str | None, note_expiry: datetime | None
    ) -> None:
        """Update the note on a horse."""
        self.client.table("horses").update(
            {
                "note": note,
                "note_expiry": _to_column(note_expiry),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", horse_id).execute()

    def update_feed_rank(self, feed_id: str, rank: int) -> None:
        """Update the rank of a feed."""
        self.client.table("feeds").update(
            {"rank": rank, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", feed_id).execute()


def _to_column(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)


def _parse_board(row: dict[str, object]) -> Board:
    return Board(
        id=str(row["id"]),
        timezone=str(row.get("timezone") or "UTC"),
        time_mode=ConfiguredTimeMode(row.get("time_mode") or "AUTO"),
        override_until=_parse_datetime(row.get("override_until")),
        zoom_level=int(row.get("zoom_level") or 2),
        current_page=int(row.get("current_page") or 0),
        orientation=Orientation(row.get("orientation") or "horse-major"),
    )


def _parse_horse(row: dict[str, object]) -> Horse:
    return Horse(
        id=str(row["id"]),
        board_id=str(row["board_id"]),
        name=str(row["name"]),
        note=row.get("note"),
        note_expiry=_parse_datetime(row.get("note_expiry")),
        archived=bool(row.get("archived", False)),
    )


def _parse_feed(row: dict[str, object]) -> Feed:
    return Feed(
        id=str(row["id"]),
        board_id=str(row["board_id"]),
        name=str(row["name"]),
        unit_type=str(row.get("unit_type") or "fraction"),
        unit_label=str(row.get("unit_label") or "scoop"),
        entry_options=row.get("entry_options"),
        rank=int(row.get("rank") or 0),
    )


def _parse_diet(row: dict[str, object]) -> DietEntry:
    return DietEntry(
        horse_id=str(row["horse_id"]),
        feed_id=str(row["feed_id"]),
        am_amount=_parse_optional_float(row.get("am_amount")),
        am_variant=row.get("am_variant"),
        pm_amount=_parse_optional_float(row.get("pm_amount")),
        pm_variant=row.get("pm_variant"),
    )
