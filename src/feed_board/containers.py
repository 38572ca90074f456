"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from feed_board.adapters.supabase_board_repository import SupabaseBoardRepository
from feed_board.config import Settings
from feed_board.services.boards import BoardService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    board_service: BoardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    board_service = BoardService(
        repository=SupabaseBoardRepository(supabase_client),
        row_page_size=resolved_settings.row_page_size,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        board_service=board_service,
        close_resources=close_resources,
    )
