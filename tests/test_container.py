"""Tests for container wiring."""

import asyncio

from feed_board.adapters.supabase_board_repository import SupabaseBoardRepository
from feed_board.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.board_service.repository, SupabaseBoardRepository)
    assert container.board_service.row_page_size == settings.row_page_size
    asyncio.run(container.close_resources())
