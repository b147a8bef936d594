"""Game session — owns the ball, hoop, drag gesture and scoreboard.

Input handlers never touch game state directly: they ``post`` commands, and
``tick`` drains the queue before stepping physics. All mutation therefore
happens in one place, once per frame, in arrival order.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Union

from hoopengine.types import (
    Ball,
    BallTheme,
    DragGesture,
    OutEvent,
    ResetEvent,
    RestartEvent,
    Scoreboard,
    ScoreEvent,
    ThrowEvent,
    Vec2,
)
from hoopengine.hoop import create_hoop, layout_hoop, rack_ball
from hoopengine.physics import step
from hoopengine.predictor import is_strong_enough, predict_trajectory, throw_velocity
from hoopengine.throws import launch
from hoopengine.themes import BALL_THEMES, get_theme
from hoopengine import constants

logger = logging.getLogger(__name__)


@dataclass
class PointerDown:
    x: float
    y: float


@dataclass
class PointerMove:
    x: float
    y: float


@dataclass
class PointerUp:
    pass


@dataclass
class Resize:
    width: float
    height: float


@dataclass
class Restart:
    pass


@dataclass
class SelectTheme:
    index: int


@dataclass
class OpenPicker:
    pass


@dataclass
class ClosePicker:
    pass


Command = Union[
    PointerDown, PointerMove, PointerUp, Resize, Restart, SelectTheme, OpenPicker, ClosePicker
]


class GameSession:
    """Everything one player's game needs, driven by a per-frame ``tick``."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.ball = Ball()
        self.hoop = create_hoop(width, height)
        self.drag: Optional[DragGesture] = None
        self.scoreboard = Scoreboard()
        self.theme_index = 0
        self.picker_open = False
        self.frame = 0
        self._commands: deque = deque()
        self._handlers = {
            PointerDown: lambda c: self.begin_drag(c.x, c.y),
            PointerMove: lambda c: self.move_drag(c.x, c.y),
            PointerUp: lambda c: self.end_drag(),
            Resize: lambda c: self.resize(c.width, c.height),
            Restart: lambda c: self.restart(),
            SelectTheme: lambda c: self.select_theme(c.index),
            OpenPicker: lambda c: self.set_picker_open(True),
            ClosePicker: lambda c: self.set_picker_open(False),
        }
        self.reset_ball(manual=True)

    @property
    def score(self) -> int:
        return self.scoreboard.score

    @property
    def misses(self) -> int:
        return self.scoreboard.misses

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    @property
    def theme(self) -> BallTheme:
        return get_theme(self.theme_index)

    # ---- command queue ----

    def post(self, command: Command) -> None:
        """Queue an input command for the next ``tick``."""
        self._commands.append(command)

    def drain(self) -> list:
        """Apply every queued command in arrival order."""
        events = []
        while self._commands:
            command = self._commands.popleft()
            events.extend(self._handlers[type(command)](command))
        return events

    def tick(self) -> list:
        """One frame: apply queued input, then advance the ball."""
        events = self.drain()
        self.frame += 1

        for e in step(self.ball, self.hoop, self.width, self.height, frame=self.frame):
            events.append(e)
            if isinstance(e, ScoreEvent):
                self.scoreboard.score += 1
                self.scoreboard.history.append({
                    "score": self.scoreboard.score,
                    "misses": self.scoreboard.misses,
                    "event": "score",
                    "frame": self.frame,
                })
                logger.info("Swish! score=%d misses=%d", self.score, self.misses)
            elif isinstance(e, OutEvent):
                events.append(self.reset_ball(manual=False))

        return events

    # ---- operations ----

    def reset_ball(self, manual: bool = False) -> ResetEvent:
        """Return the ball to the rack and start a new turn.

        An automatic reset of a flying ball that never scored counts a miss;
        a manual one never does.
        """
        missed = not manual and self.ball.is_flying and not self.hoop.has_scored_this_turn
        if missed:
            self.scoreboard.misses += 1
            self.scoreboard.history.append({
                "score": self.scoreboard.score,
                "misses": self.scoreboard.misses,
                "event": "miss",
                "frame": self.frame,
            })
            logger.info("Miss. score=%d misses=%d", self.score, self.misses)

        rack_ball(self.ball, self.height)
        self.hoop.has_scored_this_turn = False
        logger.debug("Ball reset (manual=%s)", manual)
        return ResetEvent(manual=manual, missed=missed)

    def begin_drag(self, x: float, y: float) -> list:
        """Grab the ball if the pointer lands close enough to it."""
        if self.ball.is_flying or self.picker_open:
            return []
        pointer = Vec2(x, y)
        if pointer.distance_to(self.ball.pos) < constants.GRAB_RADIUS:
            self.drag = DragGesture(start=self.ball.pos.copy(), current=pointer)
        return []

    def move_drag(self, x: float, y: float) -> list:
        if self.drag is None:
            return []
        self.drag.current = Vec2(x, y)
        return []

    def end_drag(self) -> list:
        """Turn the finished drag into a throw, or drop it if too weak."""
        if self.drag is None:
            return []
        drag, self.drag = self.drag, None

        if not is_strong_enough(throw_velocity(drag)):
            logger.debug("Drag too short to throw, discarded")
            return []

        delta = drag.displacement()
        launch(self.ball, delta.x, delta.y)
        logger.debug("Throw vx=%.2f vy=%.2f", self.ball.vel.x, self.ball.vel.y)
        return [ThrowEvent(vel=self.ball.vel.copy(), frame=self.frame)]

    def resize(self, width: float, height: float) -> list:
        """Re-lay out the court; a resting ball moves to the new rack.

        A ball in flight keeps its position and velocity.
        """
        self.width = width
        self.height = height
        layout_hoop(self.hoop, width, height)
        if not self.ball.is_flying:
            return [self.reset_ball(manual=True)]
        return []

    def restart(self) -> list:
        """Clear score and misses and rack the ball without a miss."""
        event = RestartEvent(previous_score=self.score, previous_misses=self.misses)
        self.scoreboard.score = 0
        self.scoreboard.misses = 0
        self.scoreboard.history.clear()
        logger.info("Restarted (was %d made, %d missed)", event.previous_score, event.previous_misses)
        return [event, self.reset_ball(manual=True)]

    def select_theme(self, index: int) -> list:
        self.theme_index = index % len(BALL_THEMES)
        return []

    def set_picker_open(self, is_open: bool) -> list:
        self.picker_open = is_open
        return []

    def prediction(self) -> list[Vec2]:
        """Trajectory guide for the active drag, or an empty list."""
        if self.drag is None:
            return []
        return predict_trajectory(self.ball, self.drag)
