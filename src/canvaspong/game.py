"""Pygame host: frame loop, input capture, and rendering of game snapshots."""

from __future__ import annotations

from enum import Enum, auto
from typing import Sequence
import logging
import random
import pygame

from .entities import Move
from .logs import log_message
from .settings import GameSettings, SettingsManager
from .state import GameState, create_session, step
from .utils import (
    BALL_HALF_SIZE,
    BG_COLOR,
    COURT_HEIGHT,
    COURT_WIDTH,
    CYAN,
    LINE_COLOR,
    MAGENTA,
    PADDLE_HALF_HEIGHT,
    PADDLE_HALF_WIDTH,
    SHADOW_COLOR,
    TEXT_COLOR,
    YELLOW,
)

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Finite states for the frame loop."""

    PLAYING = auto()
    PAUSED = auto()


def read_move(pressed: Sequence[bool], up_key: int, down_key: int) -> Move:
    """Collapse held keys into one move command; both held cancels out."""
    up = bool(pressed[up_key])
    down = bool(pressed[down_key])
    if up and not down:
        return Move.UP
    if down and not up:
        return Move.DOWN
    return Move.STATIONARY


class PongGame:
    """Owns the window and threads a ``GameState`` through ``step`` each frame."""

    def __init__(self, settings: GameSettings | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.settings_manager = SettingsManager(settings)
        self.settings = self.settings_manager.settings
        self.rng = random.Random(self.settings.seed)

        self.screen: pygame.Surface | None = None
        self.state: GameState = create_session(
            self.settings.session_name,
            rng=self.rng,
            prepare_surface=self._prepare_surface,
        )
        self.clock = pygame.time.Clock()
        self.score_font = pygame.font.SysFont("consolas", 48, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)

        self.phase = GamePhase.PLAYING
        self.ticks = 0
        log_message("session started", self.state.name)

    def _prepare_surface(self, width: int, height: int) -> None:
        if self.screen is None:
            self.screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption(f"canvaspong - {self.settings.session_name}")

    def restart(self) -> None:
        """Start a fresh session with the same name."""
        self.state = create_session(self.state.name, rng=self.rng, prepare_surface=self._prepare_surface)
        self.phase = GamePhase.PLAYING
        self.ticks = 0
        log_message("session restarted", self.state.name)

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            self.clock.tick(self.settings.fps)
            running = self._handle_events()
            if not running:
                break
            if self.phase == GamePhase.PLAYING:
                self.advance(read_move(pygame.key.get_pressed(), self.settings.controls.up, self.settings.controls.down))
            self._render()

        log_message(f"session ended {self.state.left_score}-{self.state.right_score}", self.state.name)
        pygame.quit()

    def advance(self, move: Move) -> GameState:
        """Run one simulation tick and keep the new snapshot."""
        previous = self.state
        self.state = step(previous, move, rng=self.rng)
        self.ticks += 1
        if (self.state.left_score, self.state.right_score) != (previous.left_score, previous.right_score):
            log_message(f"score {self.state.left_score}-{self.state.right_score}", self.state.name)
        return self.state

    def _handle_events(self) -> bool:
        controls = self.settings.controls
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == controls.pause:
                self.phase = GamePhase.PAUSED if self.phase == GamePhase.PLAYING else GamePhase.PLAYING
                logger.debug("phase -> %s", self.phase.name)
            elif event.key == controls.restart:
                self.restart()
            elif event.key == controls.toggle_center_line:
                self.settings_manager.toggle_center_line()
            elif event.key == controls.toggle_fps:
                self.settings_manager.toggle_fps()
        return True

    def _render(self) -> None:
        if self.screen is None:
            return
        self.render_state(self.screen, self.state)
        if self.phase == GamePhase.PAUSED:
            self._render_pause_overlay(self.screen)
        pygame.display.flip()

    def render_state(self, surface: pygame.Surface, state: GameState) -> None:
        """Draw court, paddles, ball and scores for one snapshot."""
        surface.fill(BG_COLOR)
        if self.settings.display.show_center_line:
            for y in range(0, COURT_HEIGHT, 30):
                pygame.draw.rect(surface, LINE_COLOR, pygame.Rect(COURT_WIDTH // 2 - 2, y, 4, 16))

        for paddle, color in ((state.left, MAGENTA), (state.right, CYAN)):
            rect = pygame.Rect(
                int(paddle.x - PADDLE_HALF_WIDTH),
                int(paddle.y - PADDLE_HALF_HEIGHT),
                PADDLE_HALF_WIDTH * 2,
                PADDLE_HALF_HEIGHT * 2,
            )
            pygame.draw.rect(surface, color, rect, border_radius=3)

        ball = state.ball
        pygame.draw.rect(
            surface,
            YELLOW,
            pygame.Rect(int(ball.x - BALL_HALF_SIZE), int(ball.y - BALL_HALF_SIZE), BALL_HALF_SIZE * 2, BALL_HALF_SIZE * 2),
        )

        for text, x in ((str(state.left_score), COURT_WIDTH // 4), (str(state.right_score), COURT_WIDTH * 3 // 4)):
            shadow = self.score_font.render(text, True, SHADOW_COLOR)
            label = self.score_font.render(text, True, TEXT_COLOR)
            surface.blit(shadow, (x - label.get_width() // 2 + 3, 23))
            surface.blit(label, (x - label.get_width() // 2, 20))

        name = self.small_font.render(state.name, True, TEXT_COLOR)
        surface.blit(name, (COURT_WIDTH // 2 - name.get_width() // 2, COURT_HEIGHT - 28))
        if self.settings.display.show_fps:
            fps = self.small_font.render(f"{self.clock.get_fps():.0f} fps", True, TEXT_COLOR)
            surface.blit(fps, (10, COURT_HEIGHT - 28))

    def _render_pause_overlay(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((COURT_WIDTH, COURT_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 135))
        surface.blit(overlay, (0, 0))
        title = self.score_font.render("PAUSED", True, YELLOW)
        surface.blit(title, (COURT_WIDTH // 2 - title.get_width() // 2, COURT_HEIGHT // 2 - 40))
        hint = self.small_font.render("P resume | R restart | ESC quit", True, TEXT_COLOR)
        surface.blit(hint, (COURT_WIDTH // 2 - hint.get_width() // 2, COURT_HEIGHT // 2 + 20))
