"""Hoop layout — rim and backboard placement for a given viewport."""

from hoopengine.types import Ball, Hoop, Vec2
from hoopengine import constants


def layout_hoop(hoop: Hoop, width: float, height: float) -> Hoop:
    """Place the backboard flush right and the rim just left of it.

    Mutates and returns ``hoop``; ``has_scored_this_turn`` is left alone so a
    resize mid-flight does not reopen a scored turn.
    """
    hoop.backboard_x = width - hoop.backboard_w
    hoop.y = height * constants.RIM_HEIGHT_RATIO
    hoop.x = hoop.backboard_x - hoop.width / 2 - constants.RIM_GAP
    hoop.backboard_y = hoop.y - constants.BACKBOARD_RISE
    return hoop


def create_hoop(width: float, height: float) -> Hoop:
    """Create a hoop laid out for a ``width`` x ``height`` viewport."""
    return layout_hoop(Hoop(), width, height)


def rack_position(height: float) -> Vec2:
    """Where a resting ball sits."""
    return Vec2(constants.RACK_X, height - constants.RACK_OFFSET_Y)


def rack_ball(ball: Ball, height: float) -> Ball:
    """Put ``ball`` back on the rack with no motion or spin."""
    ball.pos = rack_position(height)
    ball.vel = Vec2(0.0, 0.0)
    ball.angle = 0.0
    ball.rotation_speed = 0.0
    ball.is_flying = False
    return ball


def is_out_of_bounds(pos: Vec2, width: float, height: float) -> bool:
    margin = constants.OUT_OF_BOUNDS_MARGIN
    return pos.y > height + margin or pos.x > width + margin or pos.x < -margin
