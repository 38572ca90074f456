"""Horse note expiry."""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

from feed_board.domain.board import Horse


@dataclass(frozen=True)
class NoteStatus:
    """Expiry state of a horse note."""

    note: str | None
    note_expiry: datetime | None
    is_expired: bool
    expires_in: timedelta | None


def is_note_expired(horse: Horse, now: datetime) -> bool:
    """Return True when the horse has a note expiry in the past."""
    return horse.note_expiry is not None and horse.note_expiry < now


def clear_expired_notes(
    horses: Sequence[Horse], now: datetime | None = None
) -> tuple[list[Horse], int]:
    """Return horses with expired notes cleared, and how many were cleared."""
    current = now or datetime.now(tz=UTC)
    cleared = 0
    updated = []
    for horse in horses:
        if is_note_expired(horse, current):
            cleared += 1
            horse = replace(horse, note=None, note_expiry=None)
        updated.append(horse)
    return updated, cleared


def note_status(horse: Horse, now: datetime | None = None) -> NoteStatus:
    """Describe the note on a horse relative to now."""
    current = now or datetime.now(tz=UTC)
    return NoteStatus(
        note=horse.note,
        note_expiry=horse.note_expiry,
        is_expired=is_note_expired(horse, current),
        expires_in=horse.note_expiry - current if horse.note_expiry else None,
    )
