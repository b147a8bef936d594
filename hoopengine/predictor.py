"""Trajectory guide — free-flight preview of the throw the current drag would make."""

from hoopengine.types import Ball, DragGesture, Vec2
from hoopengine import constants


def throw_velocity(drag: DragGesture) -> Vec2:
    """Launch velocity a release right now would give."""
    return drag.displacement() * constants.THROW_SCALE


def is_strong_enough(vel: Vec2) -> bool:
    """A throw launches only when |vx| + |vy| clears the minimum."""
    return abs(vel.x) + abs(vel.y) > constants.MIN_THROW_SPEED


def predict_trajectory(
    ball: Ball,
    drag: DragGesture,
    steps: int = constants.PREDICTION_STEPS,
) -> list[Vec2]:
    """Polyline from the ball's rest position along the candidate throw.

    Gravity only: no air resistance and no backboard or rim contact. The ball
    itself is never modified. Returns ``steps + 1`` points.
    """
    pos = ball.pos.copy()
    vel = throw_velocity(drag)
    points = [pos.copy()]
    for _ in range(steps):
        vel.y += constants.GRAVITY
        pos.x += vel.x
        pos.y += vel.y
        points.append(pos.copy())
    return points
