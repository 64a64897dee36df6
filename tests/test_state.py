from __future__ import annotations

import math
import random

import pytest

from canvaspong.entities import Ball, Move, Paddle
from canvaspong.state import (
    GameState,
    calculate_reflection_factor,
    create_session,
    step,
    update_position,
)


def _state(ball: Ball, left_y: float = 300, right_y: float = 300) -> GameState:
    return GameState(name="test", ball=ball, left=Paddle(25, left_y), right=Paddle(750, right_y))


def test_create_session_defaults_and_surface_callback(rng: random.Random) -> None:
    calls: list[tuple[int, int]] = []
    state = create_session("alice", rng=rng, prepare_surface=lambda w, h: calls.append((w, h)))
    assert calls == [(800, 600)]
    assert state.name == "alice"
    assert (state.ball.x, state.ball.y, state.ball.xspeed) == (395, 295, 1)
    assert (state.left.x, state.left.y) == (25, 300)
    assert (state.right.x, state.right.y) == (750, 300)
    assert state.move == Move.STATIONARY
    assert (state.left_score, state.right_score) == (0, 0)


def test_step_does_not_mutate_input() -> None:
    state = _state(Ball(x=200, y=200, xspeed=-1, yspeed=0.5))
    before = state.to_payload()
    nxt = step(state, Move.UP)
    assert state.to_payload() == before
    assert nxt is not state
    assert nxt.ball is not state.ball
    assert nxt.left is not state.left
    assert nxt.right is not state.right


def test_step_is_not_idempotent() -> None:
    state = _state(Ball(x=200, y=200, xspeed=-1, yspeed=0.5))
    once = step(state, Move.STATIONARY)
    twice = step(once, Move.STATIONARY)
    assert once.to_payload() != twice.to_payload()
    assert twice.ball.x == pytest.approx(198)


def test_human_move_applies_to_right_paddle() -> None:
    state = _state(Ball(x=395, y=300, xspeed=1, yspeed=0))
    assert step(state, Move.UP).right.y == 299
    assert step(state, Move.DOWN).right.y == 301
    assert step(state, Move.STATIONARY).right.y == 300


def test_update_position_uses_recorded_move() -> None:
    state = _state(Ball(x=395, y=300, xspeed=1, yspeed=0))
    state.move = Move.DOWN
    assert update_position(state).right.y == 301


def test_stall_guard_restarts_ball() -> None:
    state = _state(Ball(x=395, y=300, xspeed=0, yspeed=0))
    nxt = step(state, Move.STATIONARY)
    assert nxt.ball.xspeed == 1
    assert nxt.ball.x == 396


def test_wall_bounce_flips_yspeed_before_integration() -> None:
    state = _state(Ball(x=395, y=2, xspeed=1, yspeed=-1))
    nxt = step(state, Move.STATIONARY)
    assert nxt.ball.yspeed == 1
    assert nxt.ball.y == 3


def test_left_paddle_bounce_reflects_and_speeds_up() -> None:
    state = _state(Ball(x=54, y=300, xspeed=-1, yspeed=0))
    nxt = step(state, Move.STATIONARY)
    assert nxt.ball.xspeed == pytest.approx(1.05)
    assert nxt.ball.yspeed == pytest.approx(0)
    assert nxt.ball.x == pytest.approx(55.05)


def test_right_paddle_bounce_adds_offset() -> None:
    state = _state(Ball(x=746, y=320, xspeed=2, yspeed=0), right_y=300)
    nxt = step(state, Move.STATIONARY)
    assert nxt.ball.xspeed == pytest.approx(-2.1)
    assert nxt.ball.yspeed == pytest.approx(0.2)


def test_reflection_factor_picks_paddle_by_court_half() -> None:
    left = Paddle(25, 100)
    right = Paddle(750, 500)
    assert calculate_reflection_factor(Ball(x=401, y=300), left, right) == pytest.approx(-2)
    assert calculate_reflection_factor(Ball(x=400, y=300), left, right) == pytest.approx(2)


def test_ball_past_right_goal_scores_for_left(rng: random.Random) -> None:
    state = _state(Ball(x=780, y=100, xspeed=1, yspeed=0))
    nxt = step(state, Move.STATIONARY, rng=rng)
    assert (nxt.left_score, nxt.right_score) == (1, 0)
    assert nxt.ball.xspeed == 1
    assert nxt.ball.x == 396
    assert nxt.ball.y == pytest.approx(295 + nxt.ball.yspeed)


def test_ball_past_left_goal_scores_for_right(rng: random.Random) -> None:
    state = _state(Ball(x=20, y=500, xspeed=-1, yspeed=0), left_y=100)
    nxt = step(state, Move.STATIONARY, rng=rng)
    assert (nxt.left_score, nxt.right_score) == (0, 1)
    assert nxt.ball.x == 396


def test_serve_is_deterministic_with_seeded_rng() -> None:
    state = _state(Ball(x=780, y=100, xspeed=1, yspeed=0))
    a = step(state, Move.STATIONARY, rng=random.Random(5))
    b = step(state, Move.STATIONARY, rng=random.Random(5))
    assert a.to_payload() == b.to_payload()


def _flipped(before: float, after: float) -> bool:
    return before * after < 0


def test_long_session_keeps_invariants(rng: random.Random) -> None:
    state = create_session("soak", rng=rng)
    moves = [Move.UP, Move.DOWN, Move.STATIONARY]
    chooser = random.Random(3)
    scores = (0, 0)
    for _ in range(20000):
        previous = state
        state = step(previous, chooser.choice(moves), rng=rng)
        assert 50 <= state.left.y <= 550
        assert 50 <= state.right.y <= 550
        assert math.isfinite(state.ball.xspeed) and math.isfinite(state.ball.yspeed)
        assert state.left_score >= scores[0] and state.right_score >= scores[1]
        assert state.left_score + state.right_score - sum(scores) <= 1

        served = (state.left_score, state.right_score) != scores
        scores = (state.left_score, state.right_score)
        if served:
            continue
        before = previous.ball
        # Collision checks run against the paddles after this tick's moves.
        hit = before.does_hit_paddle(state.left, state.right)
        wall = before.is_at_top_or_bottom()
        assert _flipped(before.xspeed, state.ball.xspeed) == hit
        if _flipped(before.yspeed, state.ball.yspeed):
            assert wall or hit


def test_payload_shape() -> None:
    payload = _state(Ball(x=1, y=2, xspeed=3, yspeed=4)).to_payload()
    assert payload == {
        "name": "test",
        "ball": {"xpos": 1, "ypos": 2, "xspeed": 3, "yspeed": 4},
        "left": {"xpos": 25, "ypos": 300},
        "right": {"xpos": 750, "ypos": 300},
        "move": 0,
        "leftScore": 0,
        "rightScore": 0,
    }


def test_default_state_serves_a_random_ball(monkeypatch) -> None:
    monkeypatch.setattr(random.Random, "random", lambda self: 0.25)
    state = GameState(name="fresh")
    assert (state.ball.x, state.ball.y, state.ball.xspeed) == (395, 295, 1)
    assert state.ball.yspeed == 0.25
