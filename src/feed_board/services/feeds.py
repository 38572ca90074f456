"""Feed ranking and diet housekeeping."""

from collections.abc import Sequence
from dataclasses import replace

from feed_board.domain.board import DietEntry, Feed, Horse


def calculate_feed_rankings(
    feeds: Sequence[Feed], horses: Sequence[Horse], diet: Sequence[DietEntry]
) -> list[Feed]:
    """Rank feeds by how many horses use them, most used first.

    A horse uses a feed when either its AM or PM amount is positive, and is
    counted once per feed. Entries for horses not in ``horses`` are ignored.
    Feeds with equal usage keep their input order. Ranks start at 1.
    """
    horse_ids = {horse.id for horse in horses}
    users: dict[str, set[str]] = {feed.id: set() for feed in feeds}
    for entry in diet:
        if entry.feed_id not in users or entry.horse_id not in horse_ids:
            continue
        if (entry.am_amount or 0) > 0 or (entry.pm_amount or 0) > 0:
            users[entry.feed_id].add(entry.horse_id)
    ordered = sorted(feeds, key=lambda feed: len(users[feed.id]), reverse=True)
    return [replace(feed, rank=index) for index, feed in enumerate(ordered, start=1)]


def cleanup_orphaned_diet(
    diet: Sequence[DietEntry], horses: Sequence[Horse], feeds: Sequence[Feed]
) -> list[DietEntry]:
    """Drop diet entries whose horse or feed no longer exists."""
    horse_ids = {horse.id for horse in horses}
    feed_ids = {feed.id for feed in feeds}
    return [
        entry
        for entry in diet
        if entry.horse_id in horse_ids and entry.feed_id in feed_ids
    ]
