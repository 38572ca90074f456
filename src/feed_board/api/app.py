"""FastAPI application factory."""

import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI

from feed_board.api.boards import router as boards_router
from feed_board.api.grid_models import GridRequest
from feed_board.app_logging import configure_logging
from feed_board.containers import AppContainer
from feed_board.services.grid import compute_grid, get_total_2d_pages


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Feed board API starting",
            extra={"environment": container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(boards_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/grid")
    async def grid(payload: GridRequest) -> dict[str, object]:
        """Compute a grid from a snapshot supplied by the caller."""
        output = compute_grid(
            [horse.to_domain() for horse in payload.horses],
            [feed.to_domain() for feed in payload.feeds],
            [entry.to_domain() for entry in payload.diet],
            orientation=payload.orientation,
            time_mode=payload.time_mode,
            page=payload.page,
            page_size=payload.page_size or math.inf,
            row_page=payload.row_page,
            row_page_size=payload.row_page_size or math.inf,
        )
        result = asdict(output)
        result["total_pages"] = get_total_2d_pages(
            output.total_column_pages, output.total_row_pages
        )
        return result

    return app
