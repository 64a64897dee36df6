"""Game state snapshot and the per-tick physics, collision and scoring step."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable
import logging
import random

from .ai import PaddleAI, apply_move, make_ai_move
from .entities import Ball, Move, Paddle
from .utils import (
    COURT_HEIGHT,
    COURT_MIDLINE_X,
    COURT_WIDTH,
    LEFT_PADDLE_X,
    PADDLE_START_Y,
    REFLECTION_DIVISOR,
    RIGHT_PADDLE_X,
    SPEEDUP_FACTOR,
)

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], Any]

_AI = PaddleAI()


@dataclass(slots=True)
class GameState:
    """Everything needed to advance and draw one frame.

    A state owns its ball and paddles; ``update_position`` never mutates a
    state it was handed, so previously returned snapshots stay valid.
    """

    name: str
    ball: Ball = field(default_factory=Ball.serve)
    left: Paddle = field(default_factory=lambda: Paddle(LEFT_PADDLE_X, PADDLE_START_Y))
    right: Paddle = field(default_factory=lambda: Paddle(RIGHT_PADDLE_X, PADDLE_START_Y))
    move: Move = Move.STATIONARY
    left_score: int = 0
    right_score: int = 0

    def copy(self) -> GameState:
        """Return an independent value copy."""
        return GameState(
            name=self.name,
            ball=self.ball.copy(),
            left=self.left.copy(),
            right=self.right.copy(),
            move=self.move,
            left_score=self.left_score,
            right_score=self.right_score,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the field names the renderer marshals across the host boundary."""
        return {
            "name": self.name,
            "ball": self.ball.to_payload(),
            "left": self.left.to_payload(),
            "right": self.right.to_payload(),
            "move": self.move.value,
            "leftScore": self.left_score,
            "rightScore": self.right_score,
        }


def create_session(
    name: str,
    rng: random.Random | None = None,
    prepare_surface: SurfaceFactory | None = None,
) -> GameState:
    """Build the opening state and ask the host to prepare its drawing surface."""
    if prepare_surface is not None:
        prepare_surface(COURT_WIDTH, COURT_HEIGHT)
    logger.debug("session %r created", name)
    return GameState(name=name, ball=Ball.serve(rng))


def calculate_reflection_factor(ball: Ball, left: Paddle, right: Paddle) -> float:
    """Vertical offset from the paddle on the ball's half of the court, scaled down.

    The paddle is chosen by court half, not by which contact actually fired.
    """
    paddle = right if ball.x > COURT_MIDLINE_X else left
    return (ball.y - paddle.y) / REFLECTION_DIVISOR


def update_position(state: GameState, rng: random.Random | None = None) -> GameState:
    """Advance a copy of ``state`` by one tick and return it."""
    nxt = state.copy()
    ball = nxt.ball

    if ball.is_stalled():
        ball.xspeed = 1

    apply_move(nxt.right, nxt.move)
    make_ai_move(ball, nxt.left, _AI)

    if ball.is_at_top_or_bottom():
        ball.yspeed = -ball.yspeed
    if ball.does_hit_paddle(nxt.left, nxt.right):
        ball.xspeed = -ball.xspeed * SPEEDUP_FACTOR
        ball.yspeed += calculate_reflection_factor(ball, nxt.left, nxt.right)

    # Serve position is inside both goal lines, so at most one of these fires.
    if nxt.ball.scores_on_right():
        nxt.ball = Ball.serve(rng)
        nxt.left_score += 1
        logger.debug("%s: left scores (%d-%d)", nxt.name, nxt.left_score, nxt.right_score)
    if nxt.ball.scores_on_left():
        nxt.ball = Ball.serve(rng)
        nxt.right_score += 1
        logger.debug("%s: right scores (%d-%d)", nxt.name, nxt.left_score, nxt.right_score)

    nxt.ball.update()
    return nxt


def step(state: GameState, move: Move, rng: random.Random | None = None) -> GameState:
    """Record this tick's human command and advance one tick."""
    return update_position(replace(state, move=move), rng)
