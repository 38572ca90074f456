"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime

import pytest

from feed_board.config import Settings
from feed_board.containers import AppContainer
from feed_board.domain.board import Board, DietEntry, Feed, Horse
from feed_board.services.boards import BoardRepository, BoardService


def make_horse(horse_id: str, name: str, **overrides: object) -> Horse:
    return Horse(id=horse_id, board_id="board-1", name=name, **overrides)


def make_feed(feed_id: str, name: str, rank: int = 0, **overrides: object) -> Feed:
    return Feed(id=feed_id, board_id="board-1", name=name, rank=rank, **overrides)


def make_diet(horse_id: str, feed_id: str, **overrides: object) -> DietEntry:
    return DietEntry(horse_id=horse_id, feed_id=feed_id, **overrides)


# Apollo: Oats AM | Bella: Hay PM | Charlie: Oats+Vitamins AM+PM
HORSES = [
    make_horse("h1", "Apollo"),
    make_horse("h2", "Bella"),
    make_horse("h3", "Charlie"),
]

FEEDS = [
    make_feed("f1", "Oats", rank=3),
    make_feed("f2", "Hay", rank=2),
    make_feed("f3", "Vitamins", rank=1),
]

DIET = [
    make_diet("h1", "f1", am_amount=2),
    make_diet("h2", "f2", pm_amount=1),
    make_diet("h3", "f1", am_amount=1, pm_amount=1),
    make_diet("h3", "f3", am_amount=0.5, pm_amount=0.5),
]


@dataclass
class InMemoryBoardRepository(BoardRepository):
    """In-memory board repository for tests."""

    boards: dict[str, Board] = field(default_factory=dict)
    horses: list[Horse] = field(default_factory=list)
    feeds: list[Feed] = field(default_factory=list)
    diet: list[DietEntry] = field(default_factory=list)
    note_updates: list[tuple[str, str | None, datetime | None]] = field(
        default_factory=list
    )
    rank_updates: list[tuple[str, int]] = field(default_factory=list)

    def get_board(self, board_id: str) -> Board | None:
        return self.boards.get(board_id)

    def list_horses(self, board_id: str) -> list[Horse]:
        return [horse for horse in self.horses if horse.board_id == board_id]

    def list_feeds(self, board_id: str) -> list[Feed]:
        return [feed for feed in self.feeds if feed.board_id == board_id]

    def list_diet(self, board_id: str) -> list[DietEntry]:
        horse_ids = {horse.id for horse in self.list_horses(board_id)}
        return [entry for entry in self.diet if entry.horse_id in horse_ids]

    def update_board(self, board_id: str, payload: dict[str, object]) -> Board:
        board = replace(self.boards[board_id], **payload)
        self.boards[board_id] = board
        return board

    def update_horse_note(
        self, horse_id: str, note: str | None, note_expiry: datetime | None
    ) -> None:
        self.note_updates.append((horse_id, note, note_expiry))
        self.horses = [
            replace(horse, note=note, note_expiry=note_expiry)
            if horse.id == horse_id
            else horse
            for horse in self.horses
        ]

    def update_feed_rank(self, feed_id: str, rank: int) -> None:
        self.rank_updates.append((feed_id, rank))
        self.feeds = [
            replace(feed, rank=rank) if feed.id == feed_id else feed
            for feed in self.feeds
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def board_repository() -> InMemoryBoardRepository:
    return InMemoryBoardRepository(
        boards={"board-1": Board(id="board-1")},
        horses=list(HORSES),
        feeds=list(FEEDS),
        diet=list(DIET),
    )


@pytest.fixture
def container(
    settings: Settings, board_repository: InMemoryBoardRepository
) -> AppContainer:
    board_service = BoardService(
        repository=board_repository, row_page_size=settings.row_page_size
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        board_service=board_service,
        close_resources=close_resources,
    )
