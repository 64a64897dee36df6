"""Executable entrypoint for canvaspong."""

from __future__ import annotations

from .game import PongGame
from .logs import configure_logging, shutdown_logging
from .settings import load_settings


def main() -> None:
    """Launch the game."""
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_queue_size)
    try:
        PongGame(settings).run()
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
