"""ASGI entrypoint for the feed board API."""

from feed_board.api.app import create_app
from feed_board.containers import build_container

app = create_app(build_container())
