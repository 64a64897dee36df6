"""Runtime configuration loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os

from dotenv import load_dotenv
import pygame

from .logs import DEFAULT_QUEUE_SIZE
from .utils import FPS, clamp

ENV_PREFIX = "CANVASPONG_"


def _env_int(name: str, default: int | None) -> int | None:
    value = os.getenv(ENV_PREFIX + name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    show_center_line: bool = True
    show_fps: bool = False


@dataclass(slots=True)
class ControlScheme:
    """Keyboard bindings for the human paddle and session control."""

    up: int = pygame.K_UP
    down: int = pygame.K_DOWN
    pause: int = pygame.K_p
    restart: int = pygame.K_r
    toggle_center_line: int = pygame.K_c
    toggle_fps: int = pygame.K_f


@dataclass(slots=True)
class GameSettings:
    """Settings for one run of the game."""

    session_name: str = "player"
    fps: int = FPS
    seed: int | None = None
    log_level: str = "INFO"
    log_queue_size: int = DEFAULT_QUEUE_SIZE
    display: DisplaySettings = field(default_factory=DisplaySettings)
    controls: ControlScheme = field(default_factory=ControlScheme)


def load_settings() -> GameSettings:
    """Read settings from ``CANVASPONG_*`` variables, falling back to defaults."""
    load_dotenv()
    settings = GameSettings()

    settings.session_name = os.getenv(ENV_PREFIX + "NAME", settings.session_name).strip() or settings.session_name
    settings.fps = int(clamp(_env_int("FPS", settings.fps), 1, 240))
    settings.seed = _env_int("SEED", None)
    settings.log_queue_size = max(1, _env_int("LOG_QUEUE", settings.log_queue_size))

    level = os.getenv(ENV_PREFIX + "LOG_LEVEL", settings.log_level).strip().upper()
    if isinstance(logging.getLevelName(level), int):
        settings.log_level = level
    return settings


class SettingsManager:
    """Hold and mutate settings for the current process."""

    def __init__(self, settings: GameSettings | None = None) -> None:
        self.settings = settings or load_settings()

    def toggle_center_line(self) -> bool:
        """Flip the centre line and return the new value."""
        display = self.settings.display
        display.show_center_line = not display.show_center_line
        return display.show_center_line

    def toggle_fps(self) -> bool:
        """Flip the FPS counter and return the new value."""
        display = self.settings.display
        display.show_fps = not display.show_fps
        return display.show_fps
