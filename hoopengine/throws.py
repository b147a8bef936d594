"""Preset throws for headless runs and charts.

Each preset is a drag displacement (end minus start, in pixels) applied from
the rack on the reference court. Screen y grows downward, so upward throws
have negative ``dy``.
"""

from hoopengine.types import Ball
from hoopengine.hoop import rack_ball
from hoopengine import constants

# Reference court used by the CLI and the analysis charts
COURT_WIDTH = 1280
COURT_HEIGHT = 720

THROW_PRESETS = {
    "high_arc": {
        "label": "High Arc",
        "dx": 111,
        "dy": -139,
    },
    "line_drive": {
        "label": "Line Drive",
        "dx": 190,
        "dy": -70,
    },
    "bank_shot": {
        "label": "Bank Shot",
        "dx": 150,
        "dy": -115,
    },
    "rainbow": {
        "label": "Rainbow",
        "dx": 95,
        "dy": -175,
    },
    "soft_lob": {
        "label": "Soft Lob",
        "dx": 70,
        "dy": -160,
    },
    "wrong_way": {
        "label": "Wrong Way",
        "dx": -60,
        "dy": -120,
    },
}


def launch(ball: Ball, dx: float, dy: float) -> Ball:
    """Give ``ball`` the velocity and spin a drag of (dx, dy) produces."""
    ball.vel.x = dx * constants.THROW_SCALE
    ball.vel.y = dy * constants.THROW_SCALE
    ball.rotation_speed = ball.vel.x * constants.SPIN_SCALE
    ball.is_flying = True
    return ball


def get_throw(key: str, width: float = COURT_WIDTH, height: float = COURT_HEIGHT) -> Ball:
    """Return a flying Ball, launched from the rack, for a preset key."""
    preset = THROW_PRESETS[key]
    ball = rack_ball(Ball(), height)
    return launch(ball, preset["dx"], preset["dy"])


def list_throws() -> list[str]:
    """Return all available throw preset keys."""
    return list(THROW_PRESETS.keys())
