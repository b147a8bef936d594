"""Ball physics — gravity, air resistance, backboard and rim contact, swish gate.

One call to ``step`` advances the ball by one display frame. Contacts are
checked against the post-integration position only (no swept collision), so a
fast ball can pass a rim end between frames.
"""

import dataclasses
from typing import Union

from hoopengine.types import Ball, BackboardEvent, Hoop, OutEvent, RimEvent, ScoreEvent, Vec2
from hoopengine.hoop import is_out_of_bounds
from hoopengine import constants

PhysicsEvent = Union[BackboardEvent, RimEvent, ScoreEvent, OutEvent]


def _integrate(ball: Ball) -> None:
    """Semi-implicit Euler: velocity first, then position."""
    ball.vel.y += constants.GRAVITY
    ball.vel.x *= constants.AIR_RESISTANCE
    ball.pos.x += ball.vel.x
    ball.pos.y += ball.vel.y
    ball.angle += ball.rotation_speed


def _check_backboard(ball: Ball, hoop: Hoop, frame: int) -> list[BackboardEvent]:
    """Push the ball off the backboard's left face.

    One-sided: any ball whose leading edge is past the face within the
    board's vertical span is sent left, wherever it came from.
    """
    events: list[BackboardEvent] = []
    if (
        ball.pos.x + ball.radius > hoop.backboard_x
        and hoop.backboard_y < ball.pos.y < hoop.backboard_y + hoop.backboard_h
    ):
        ball.vel.x = -abs(ball.vel.x) * constants.BOUNCE
        ball.pos.x = hoop.backboard_x - ball.radius - constants.CONTACT_CLEARANCE
        events.append(BackboardEvent(pos=ball.pos.copy(), frame=frame))
    return events


def resolve_rim_collision(ball: Ball, rim_point: Vec2, hoop: Hoop) -> bool:
    """Bounce the ball off a rim end treated as a point.

    Only a ball moving into the point (negative normal velocity) is resolved;
    an overlapping ball moving away is left as is. Returns True on a bounce.
    """
    contact = hoop.contact_distance(ball.radius)
    dist = ball.pos.distance_to(rim_point)
    if dist >= contact or dist == 0:
        return False

    normal = (ball.pos - rim_point) * (1.0 / dist)
    dot = ball.vel.dot(normal)
    if dot >= 0:
        return False

    ball.vel = (ball.vel - normal * (2 * dot)) * constants.BOUNCE
    ball.vel = ball.vel + normal * constants.RIM_KICK
    ball.pos = rim_point + normal * (contact + constants.CONTACT_CLEARANCE)
    return True


def _check_rim(ball: Ball, hoop: Hoop, frame: int) -> list[RimEvent]:
    """Left end first, then right end, each independently."""
    events: list[RimEvent] = []
    for side, point in (("left", hoop.rim_left), ("right", hoop.rim_right)):
        if resolve_rim_collision(ball, point, hoop):
            events.append(RimEvent(pos=ball.pos.copy(), side=side, frame=frame))
    return events


def _check_swish(ball: Ball, hoop: Hoop, frame: int) -> list[ScoreEvent]:
    """Score once per turn when a falling ball crosses the gate under the rim.

    Independent of rim contact: a ball can bounce off a rim end and score in
    the same frame.
    """
    events: list[ScoreEvent] = []
    if hoop.has_scored_this_turn or ball.vel.y <= 0:
        return events

    in_span = hoop.x - hoop.width / 2 < ball.pos.x < hoop.x + hoop.width / 2
    at_rim = hoop.y - constants.SWISH_WINDOW < ball.pos.y < hoop.y + constants.SWISH_WINDOW
    if in_span and at_rim:
        hoop.has_scored_this_turn = True
        events.append(ScoreEvent(pos=ball.pos.copy(), frame=frame))
    return events


def _check_out_of_bounds(ball: Ball, width: float, height: float, frame: int) -> list[OutEvent]:
    events: list[OutEvent] = []
    if is_out_of_bounds(ball.pos, width, height):
        events.append(OutEvent(pos=ball.pos.copy(), frame=frame))
    return events


def step(
    ball: Ball,
    hoop: Hoop,
    width: float,
    height: float,
    frame: int = 0,
) -> list[PhysicsEvent]:
    """Advance a flying ball by one frame and report what happened.

    Mutates ``ball`` and ``hoop.has_scored_this_turn``. Resting balls are not
    touched. An ``OutEvent`` means the turn is over; resetting the ball is the
    caller's job.
    """
    if not ball.is_flying:
        return []

    events: list[PhysicsEvent] = []
    _integrate(ball)
    events.extend(_check_backboard(ball, hoop, frame))
    events.extend(_check_rim(ball, hoop, frame))
    events.extend(_check_swish(ball, hoop, frame))
    events.extend(_check_out_of_bounds(ball, width, height, frame))
    return events


def simulate(
    initial_ball: Ball,
    hoop: Hoop,
    width: float,
    height: float,
    max_frames: int = 600,
) -> tuple[list[Ball], list[PhysicsEvent]]:
    """Fly a ball until it leaves the playfield or ``max_frames`` pass.

    Works on copies of the ball and hoop. Returns (positions, events) where
    positions holds the ball at every frame, starting with the initial state.
    """
    ball = initial_ball.copy()
    court = dataclasses.replace(hoop, has_scored_this_turn=False)
    positions = [ball.copy()]
    all_events: list[PhysicsEvent] = []

    for frame in range(1, max_frames + 1):
        if not ball.is_flying:
            break

        events = step(ball, court, width, height, frame=frame)
        all_events.extend(events)
        positions.append(ball.copy())

        if any(isinstance(e, OutEvent) for e in events):
            break

    return positions, all_events
