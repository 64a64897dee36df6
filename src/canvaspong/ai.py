"""AI decision logic for the left paddle."""

from __future__ import annotations

from dataclasses import dataclass

from .entities import Ball, Move, Paddle
from .utils import LEFT_CONTACT_X


@dataclass(slots=True)
class PaddleAI:
    """Tracks a straight-line projection of the ball onto the AI contact plane."""

    contact_x: float = LEFT_CONTACT_X

    def predict_intercept(self, ball: Ball) -> float:
        """Return the y the ball will have when it reaches the contact plane.

        Wall bounces inside the prediction window are ignored. A ball moving
        away, or one with no horizontal speed, is simply tracked at its
        current height.
        """
        if ball.xspeed >= 0:
            return ball.y
        turns = (ball.x - self.contact_x) / -ball.xspeed
        return ball.y + ball.yspeed * turns

    def choose_move(self, ball: Ball, paddle: Paddle) -> Move:
        """Pick a single one-unit step towards the predicted intercept."""
        target = self.predict_intercept(ball)
        if target > paddle.y:
            return Move.DOWN
        if target < paddle.y:
            return Move.UP
        return Move.STATIONARY


def apply_move(paddle: Paddle, move: Move) -> None:
    """Apply a move command to a paddle in place."""
    if move == Move.UP:
        paddle.move_up()
    elif move == Move.DOWN:
        paddle.move_down()


def make_ai_move(ball: Ball, paddle: Paddle, ai: PaddleAI | None = None) -> Move:
    """Move the AI paddle at most one unit and return the command it chose."""
    move = (ai or PaddleAI()).choose_move(ball, paddle)
    apply_move(paddle, move)
    return move
