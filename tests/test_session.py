"""Tests for the game session and its command queue."""

import pytest

from hoopengine.types import OutEvent, ResetEvent, RestartEvent, ScoreEvent, ThrowEvent, Vec2
from hoopengine.session import (
    ClosePicker,
    GameSession,
    OpenPicker,
    PointerDown,
    PointerMove,
    PointerUp,
    Resize,
    Restart,
    SelectTheme,
)
from hoopengine import constants

W, H = 1280, 720
RACK = (100, 570)


def _throw(session, dx, dy):
    """Queue a full drag from the ball's centre."""
    x, y = session.ball.pos.x, session.ball.pos.y
    session.post(PointerDown(x, y))
    session.post(PointerMove(x + dx, y + dy))
    session.post(PointerUp())


def _put_in_flight(session, x, y, vx, vy):
    session.ball.pos = Vec2(x, y)
    session.ball.vel = Vec2(vx, vy)
    session.ball.is_flying = True


def test_new_session_racks_ball():
    """Ball starts resting at the rack with no score or misses."""
    s = GameSession(W, H)
    assert (s.ball.pos.x, s.ball.pos.y) == RACK
    assert (s.ball.vel.x, s.ball.vel.y) == (0, 0)
    assert s.ball.is_flying is False
    assert s.score == 0 and s.misses == 0


def test_resting_ball_never_moves():
    """Without a qualifying release, ticks leave the ball where it is."""
    s = GameSession(W, H)
    for _ in range(30):
        s.tick()
    assert (s.ball.pos.x, s.ball.pos.y) == RACK
    assert (s.ball.vel.x, s.ball.vel.y) == (0, 0)


def test_grab_needs_pointer_near_ball():
    """Drag starts strictly inside GRAB_RADIUS of the ball centre."""
    s = GameSession(W, H)
    s.post(PointerDown(RACK[0] + constants.GRAB_RADIUS, RACK[1]))
    s.drain()
    assert not s.is_dragging

    s.post(PointerDown(RACK[0] + constants.GRAB_RADIUS - 1, RACK[1]))
    s.drain()
    assert s.is_dragging
    assert (s.drag.start.x, s.drag.start.y) == RACK


def test_drag_start_is_ball_not_pointer():
    """The gesture is measured from the ball centre, not the press point."""
    s = GameSession(W, H)
    s.post(PointerDown(RACK[0] + 30, RACK[1] + 20))
    s.post(PointerMove(RACK[0] + 130, RACK[1] - 80))
    s.post(PointerUp())
    s.drain()

    assert s.ball.vel.x == pytest.approx(130 * constants.THROW_SCALE)
    assert s.ball.vel.y == pytest.approx(-80 * constants.THROW_SCALE)


def test_weak_release_stays_resting():
    """|vx| + |vy| <= 2 is discarded; the ball keeps zero velocity."""
    s = GameSession(W, H)
    _throw(s, 14, 0)  # 1.96 px/frame
    events = s.drain()

    assert events == []
    assert s.ball.is_flying is False
    assert (s.ball.vel.x, s.ball.vel.y) == (0, 0)
    assert not s.is_dragging


def test_strong_release_launches_exact_velocity():
    """Release above the threshold flies with (dx, dy) * 0.14 and matching spin."""
    s = GameSession(W, H)
    _throw(s, 100, -200)
    events = s.drain()

    assert s.ball.is_flying is True
    assert s.ball.vel.x == pytest.approx(100 * 0.14)
    assert s.ball.vel.y == pytest.approx(-200 * 0.14)
    assert s.ball.rotation_speed == pytest.approx(100 * 0.14 * 0.05)
    assert any(isinstance(e, ThrowEvent) for e in events)


def test_tick_applies_input_before_physics():
    """A release queued before a tick moves the ball on that same tick."""
    s = GameSession(W, H)
    _throw(s, 100, -200)
    s.tick()

    assert s.ball.pos.x == pytest.approx(RACK[0] + 14 * constants.AIR_RESISTANCE)
    assert s.ball.vel.y == pytest.approx(-28 + constants.GRAVITY)


def test_no_grab_while_flying():
    """Pointer-down on a flying ball is ignored."""
    s = GameSession(W, H)
    _put_in_flight(s, 400, 300, 3, -2)
    s.post(PointerDown(400, 300))
    s.drain()
    assert not s.is_dragging


def test_no_grab_while_picker_open():
    """The skin picker blocks new drags until it closes."""
    s = GameSession(W, H)
    s.post(OpenPicker())
    s.post(PointerDown(*RACK))
    s.drain()
    assert not s.is_dragging

    s.post(ClosePicker())
    s.post(PointerDown(*RACK))
    s.drain()
    assert s.is_dragging


def test_move_and_release_without_drag_are_ignored():
    """Stray move/up events do nothing."""
    s = GameSession(W, H)
    s.post(PointerMove(500, 500))
    s.post(PointerUp())
    assert s.drain() == []
    assert s.ball.is_flying is False


def test_out_of_bounds_counts_one_miss_and_racks():
    """Falling past H + 100 unscored → one miss, ball back at the rack."""
    s = GameSession(W, H)
    _put_in_flight(s, 600, H + 95, 0, 6)
    events = s.tick()

    assert s.misses == 1
    assert any(isinstance(e, OutEvent) for e in events)
    resets = [e for e in events if isinstance(e, ResetEvent)]
    assert len(resets) == 1 and resets[0].manual is False and resets[0].missed is True
    assert (s.ball.pos.x, s.ball.pos.y) == (100, H - 150)
    assert s.ball.is_flying is False
    assert s.hoop.has_scored_this_turn is False

    for _ in range(5):
        s.tick()
    assert s.misses == 1


def test_scored_turn_is_not_a_miss():
    """Leaving the court after scoring ends the turn without a miss."""
    s = GameSession(W, H)
    _put_in_flight(s, 600, H + 95, 0, 6)
    s.hoop.has_scored_this_turn = True
    s.tick()

    assert s.misses == 0
    assert s.hoop.has_scored_this_turn is False


def test_score_once_per_turn():
    """Hanging in the swish gate for several frames scores a single point."""
    s = GameSession(W, H)
    _put_in_flight(s, s.hoop.x, s.hoop.y - 7, 0, 2)

    scores = 0
    for _ in range(3):
        scores += sum(1 for e in s.tick() if isinstance(e, ScoreEvent))

    assert scores == 1
    assert s.score == 1
    assert s.scoreboard.history[-1]["event"] == "score"


def test_restart_is_manual_reset():
    """Restart mid-flight clears counters and racks the ball, no miss added."""
    s = GameSession(W, H)
    s.scoreboard.score = 3
    s.scoreboard.misses = 2
    _put_in_flight(s, 400, 300, 3, -2)
    s.post(Restart())
    events = s.tick()

    assert s.score == 0 and s.misses == 0
    restart = next(e for e in events if isinstance(e, RestartEvent))
    assert (restart.previous_score, restart.previous_misses) == (3, 2)
    reset = next(e for e in events if isinstance(e, ResetEvent))
    assert reset.manual is True and reset.missed is False
    assert s.ball.is_flying is False
    assert (s.ball.pos.x, s.ball.pos.y) == RACK


def test_manual_reset_never_counts_miss():
    """reset_ball(manual=True) on an unscored flying ball adds no miss."""
    s = GameSession(W, H)
    _put_in_flight(s, 400, 300, 3, -2)
    event = s.reset_ball(manual=True)
    assert event.missed is False
    assert s.misses == 0


def test_resize_while_resting_reracks():
    """New layout and the ball follows the rack."""
    s = GameSession(W, H)
    s.post(Resize(800, 600))
    s.drain()

    assert s.hoop.backboard_x == 788
    assert s.hoop.y == pytest.approx(210)
    assert (s.ball.pos.x, s.ball.pos.y) == (100, 450)
    assert s.misses == 0


def test_resize_while_flying_keeps_ball():
    """A ball in flight keeps its state through a resize."""
    s = GameSession(W, H)
    _put_in_flight(s, 400, 300, 3, -2)
    s.post(Resize(800, 600))
    s.drain()

    assert s.ball.is_flying is True
    assert (s.ball.pos.x, s.ball.pos.y) == (400, 300)
    assert (s.ball.vel.x, s.ball.vel.y) == (3, -2)
    assert s.hoop.backboard_x == 788
    assert (s.width, s.height) == (800, 600)


def test_prediction_only_while_dragging():
    """Guide exists during a drag and never disturbs the ball."""
    s = GameSession(W, H)
    assert s.prediction() == []

    s.post(PointerDown(*RACK))
    s.post(PointerMove(RACK[0] + 150, RACK[1] - 250))
    s.drain()
    before = s.ball.copy()
    for _ in range(10):
        guide = s.prediction()
    assert len(guide) == constants.PREDICTION_STEPS + 1
    assert s.ball == before


def test_select_theme_wraps():
    """Theme index wraps around the skin list."""
    s = GameSession(W, H)
    s.post(SelectTheme(13))
    s.drain()
    assert s.theme_index == 1
    assert s.theme.name == "Deep Sea"


def test_commands_wait_for_drain():
    """Posting alone changes nothing until the queue is drained."""
    s = GameSession(W, H)
    _throw(s, 100, -200)
    assert s.ball.is_flying is False
    s.drain()
    assert s.ball.is_flying is True
