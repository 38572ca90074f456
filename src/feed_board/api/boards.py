"""Board endpoints: rendered pages and display settings."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from feed_board.api.grid_models import OrientationChange, PageChange, TimeModeChange

if TYPE_CHECKING:
    from feed_board.containers import AppContainer
    from feed_board.services.boards import BoardService

router = APIRouter(prefix="/boards", tags=["boards"])


def _board_service(request: Request) -> BoardService:
    container: AppContainer = request.app.state.container
    return container.board_service


def _not_found(board_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Board {board_id} not found",
    )


@router.get("/{board_id}/grid")
async def board_grid(
    board_id: str, request: Request, page: int | None = None
) -> dict[str, object]:
    """Render a linear board page, defaulting to the board's current page."""
    if page is not None and page < 0:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="page must be non-negative",
        )
    rendered = _board_service(request).render_page(board_id, page_index=page)
    if rendered is None:
        raise _not_found(board_id)
    return asdict(rendered)


@router.post("/{board_id}/page")
async def change_page(
    board_id: str, change: PageChange, request: Request
) -> dict[str, object]:
    """Move the board forward or back by a number of pages."""
    board = _board_service(request).change_page(board_id, change.delta)
    if board is None:
        raise _not_found(board_id)
    return asdict(board)


@router.put("/{board_id}/time-mode")
async def set_time_mode(
    board_id: str, change: TimeModeChange, request: Request
) -> dict[str, object]:
    """Force AM/PM for an hour, or return to AUTO."""
    board = _board_service(request).set_time_mode(board_id, change.time_mode)
    if board is None:
        raise _not_found(board_id)
    return asdict(board)


@router.put("/{board_id}/orientation")
async def set_orientation(
    board_id: str, change: OrientationChange, request: Request
) -> dict[str, object]:
    """Switch between horse-major and feed-major layouts."""
    board = _board_service(request).set_orientation(board_id, change.orientation)
    if board is None:
        raise _not_found(board_id)
    return asdict(board)


@router.post("/{board_id}/notes/expire")
async def expire_notes(board_id: str, request: Request) -> dict[str, int]:
    """Clear horse notes past their expiry."""
    cleared = _board_service(request).expire_notes(board_id)
    if cleared is None:
        raise _not_found(board_id)
    return {"cleared": cleared}


@router.post("/{board_id}/feeds/rank")
async def rank_feeds(board_id: str, request: Request) -> dict[str, object]:
    """Re-rank feeds by how many horses use them."""
    feeds = _board_service(request).recalculate_rankings(board_id)
    if feeds is None:
        raise _not_found(board_id)
    return {"feeds": [asdict(feed) for feed in feeds]}
