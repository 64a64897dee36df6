"""Paddle and ball entities plus the discrete move command."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import random

from .utils import (
    BALL_HALF_SIZE,
    BALL_SERVE_X,
    BALL_SERVE_XSPEED,
    BALL_SERVE_Y,
    COURT_BOTTOM,
    COURT_TOP,
    LEFT_CONTACT_X,
    LEFT_GOAL_X,
    PADDLE_HALF_HEIGHT,
    PADDLE_MAX_Y,
    PADDLE_MIN_Y,
    RIGHT_CONTACT_X,
    RIGHT_GOAL_X,
)


class Move(int, Enum):
    """Human paddle command for a single tick."""

    STATIONARY = 0
    UP = 1
    DOWN = 2


@dataclass(slots=True)
class Paddle:
    """Vertical paddle pinned to one side of the court."""

    x: float
    y: float

    def move_up(self) -> None:
        """Step one unit towards the top, stopping at the upper bound."""
        if self.y > PADDLE_MIN_Y:
            self.y -= 1

    def move_down(self) -> None:
        """Step one unit towards the bottom, stopping at the lower bound."""
        if self.y < PADDLE_MAX_Y:
            self.y += 1

    def is_at_paddle_level(self, target_y: float) -> bool:
        """Return whether a ball centred at ``target_y`` overlaps the paddle face."""
        return (
            target_y - BALL_HALF_SIZE < self.y + PADDLE_HALF_HEIGHT
            and target_y + BALL_HALF_SIZE > self.y - PADDLE_HALF_HEIGHT
        )

    def copy(self) -> Paddle:
        return replace(self)

    def to_payload(self) -> dict[str, float]:
        return {"xpos": self.x, "ypos": self.y}


@dataclass(slots=True)
class Ball:
    """Ball position and per-tick velocity."""

    x: float = BALL_SERVE_X
    y: float = BALL_SERVE_Y
    xspeed: float = BALL_SERVE_XSPEED
    yspeed: float = 0.0

    @classmethod
    def serve(cls, rng: random.Random | None = None) -> Ball:
        """Create a ball at centre court with a random downward drift in [0, 1)."""
        rng = rng or random.Random()
        return cls(yspeed=rng.random())

    def is_at_top_or_bottom(self) -> bool:
        return self.y - BALL_HALF_SIZE < COURT_TOP or self.y + BALL_HALF_SIZE > COURT_BOTTOM

    def scores_on_right(self) -> bool:
        return self.x > RIGHT_GOAL_X

    def scores_on_left(self) -> bool:
        return self.x < LEFT_GOAL_X

    def does_hit_paddle(self, left: Paddle, right: Paddle) -> bool:
        """Check the leading edge against both contact planes independently."""
        hits_left = self.x - BALL_HALF_SIZE < LEFT_CONTACT_X and left.is_at_paddle_level(self.y)
        hits_right = self.x + BALL_HALF_SIZE > RIGHT_CONTACT_X and right.is_at_paddle_level(self.y)
        return hits_left or hits_right

    def is_stalled(self) -> bool:
        return self.xspeed == 0 and self.yspeed == 0

    def update(self) -> None:
        """Integrate position by one tick."""
        self.x += self.xspeed
        self.y += self.yspeed

    def copy(self) -> Ball:
        return replace(self)

    def to_payload(self) -> dict[str, float]:
        return {"xpos": self.x, "ypos": self.y, "xspeed": self.xspeed, "yspeed": self.yspeed}
