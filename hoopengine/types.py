"""Core data types for the hoop toss simulation."""

from dataclasses import dataclass, field

from hoopengine import constants


@dataclass
class Vec2:
    """2D vector for position and velocity in screen pixels."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def magnitude(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: "Vec2") -> float:
        return (self - other).magnitude()

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)


@dataclass
class Ball:
    """The one ball in play.

    While resting (``is_flying`` False) the velocity is zero and the ball sits
    at the rack. ``angle`` and ``rotation_speed`` only drive the drawn spin.
    """
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    radius: float = constants.BALL_RADIUS
    angle: float = 0.0
    rotation_speed: float = 0.0
    is_flying: bool = False

    def copy(self) -> "Ball":
        return Ball(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            radius=self.radius,
            angle=self.angle,
            rotation_speed=self.rotation_speed,
            is_flying=self.is_flying,
        )


@dataclass
class Hoop:
    """Rim and backboard geometry for the current viewport."""
    x: float = 0.0  # rim centre
    y: float = 0.0
    width: float = constants.RIM_WIDTH
    rim_thickness: float = constants.RIM_THICKNESS
    backboard_x: float = 0.0
    backboard_y: float = 0.0
    backboard_w: float = constants.BACKBOARD_WIDTH
    backboard_h: float = constants.BACKBOARD_HEIGHT
    has_scored_this_turn: bool = False

    @property
    def rim_left(self) -> Vec2:
        return Vec2(self.x - self.width / 2, self.y)

    @property
    def rim_right(self) -> Vec2:
        return Vec2(self.x + self.width / 2, self.y)

    def contact_distance(self, ball_radius: float) -> float:
        """Centre-to-rim-end distance below which the ball touches the rim."""
        return ball_radius + self.rim_thickness / 2


@dataclass
class DragGesture:
    """A pointer-down to pointer-up interval that will become a throw."""
    start: Vec2
    current: Vec2

    def displacement(self) -> Vec2:
        return self.current - self.start


@dataclass
class BallTheme:
    """A ball skin. Colours are only used by the renderer."""
    name: str
    primary: str
    secondary: str


@dataclass
class BackboardEvent:
    """Ball pushed back off the backboard face."""
    pos: Vec2
    frame: int = 0


@dataclass
class RimEvent:
    """Ball reflected off one end of the rim."""
    pos: Vec2
    side: str  # "left" or "right"
    frame: int = 0


@dataclass
class ScoreEvent:
    """Ball dropped through the swish gate."""
    pos: Vec2
    frame: int = 0


@dataclass
class OutEvent:
    """Ball left the playfield; the turn is over."""
    pos: Vec2
    frame: int = 0


@dataclass
class ResetEvent:
    """Ball returned to the rack."""
    manual: bool
    missed: bool = False


@dataclass
class RestartEvent:
    """Score and misses were cleared."""
    previous_score: int = 0
    previous_misses: int = 0


@dataclass
class ThrowEvent:
    """A released drag launched the ball."""
    vel: Vec2
    frame: int = 0


@dataclass
class Scoreboard:
    """Made and missed shots since the last restart."""
    score: int = 0
    misses: int = 0
    history: list = field(default_factory=list)
