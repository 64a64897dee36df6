"""Shared constants and utility helpers for canvaspong."""

from __future__ import annotations

COURT_WIDTH = 800
COURT_HEIGHT = 600
FPS = 60

PADDLE_HALF_HEIGHT = 50
PADDLE_HALF_WIDTH = 5
PADDLE_MIN_Y = 50
PADDLE_MAX_Y = 550
PADDLE_START_Y = 300
LEFT_PADDLE_X = 25
RIGHT_PADDLE_X = 750

BALL_HALF_SIZE = 5
BALL_SERVE_X = 395
BALL_SERVE_Y = 295
BALL_SERVE_XSPEED = 1.0
COURT_TOP = 0
COURT_BOTTOM = 595
LEFT_GOAL_X = 25
RIGHT_GOAL_X = 775
LEFT_CONTACT_X = 50
RIGHT_CONTACT_X = 750
COURT_MIDLINE_X = 400

SPEEDUP_FACTOR = 1.05
REFLECTION_DIVISOR = 100

BG_COLOR = (8, 10, 20)
LINE_COLOR = (40, 52, 90)
TEXT_COLOR = (220, 238, 255)
SHADOW_COLOR = (15, 24, 45)

CYAN = (30, 242, 255)
MAGENTA = (255, 48, 210)
YELLOW = (255, 233, 68)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))
