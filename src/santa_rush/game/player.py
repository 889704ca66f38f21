"""Player and follower entities."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from santa_rush.core.physics import Physics, Rect, Circle

logger = logging.getLogger(__name__)


class Leader(Protocol):
    """Whatever a follower lines up behind: the player or another follower."""

    x: float
    y: float
    width: float


class Player:
    """The flying santa.

    The visual box is 80x80; collisions use a smaller 50x50 hitbox inset by
    15 pixels on each side so the hitbox always stays inside the visual box.
    """

    WIDTH = 80.0
    HEIGHT = 80.0
    HITBOX_WIDTH = 50.0
    HITBOX_HEIGHT = 50.0
    HITBOX_OFFSET_X = 15.0
    HITBOX_OFFSET_Y = 15.0

    # Cosmetic tilt, degrees
    ROTATION_FACTOR = 1.5
    MIN_ROTATION = -20.0
    MAX_ROTATION = 60.0

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y
        self.width = self.WIDTH
        self.height = self.HEIGHT
        self.velocity_y = 0.0
        self.alive = True
        self.is_boosting = False

    @property
    def rotation(self) -> float:
        """Tilt in degrees derived from vertical velocity."""
        return min(max(self.velocity_y * self.ROTATION_FACTOR, self.MIN_ROTATION), self.MAX_ROTATION)

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def hitbox(self) -> Rect:
        return Rect(
            self.x + self.HITBOX_OFFSET_X,
            self.y + self.HITBOX_OFFSET_Y,
            self.HITBOX_WIDTH,
            self.HITBOX_HEIGHT,
        )

    @property
    def hitbox_circle(self) -> Circle:
        """Circle around the hitbox center, radius half its larger side."""
        cx, cy = self.hitbox.center
        return Circle(cx, cy, max(self.HITBOX_WIDTH, self.HITBOX_HEIGHT) / 2)

    def update(self, physics: Physics, bounds_height: float) -> None:
        """Integrate one frame. Thrust and gravity both apply while boosting."""
        if not self.alive:
            return

        if self.is_boosting:
            physics.apply_thrust(self)
        physics.apply_gravity(self)

        # check_bounds clamps y, so look at the ceiling first
        hit_ceiling = self.y < 0
        hit_ground = physics.check_bounds(self, bounds_height)
        if hit_ceiling or hit_ground:
            self.alive = False
            logger.debug(f"Player hit the boundary at y={self.y:.1f}")

    def reset(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
        self.velocity_y = 0.0
        self.alive = True
        self.is_boosting = False


@dataclass
class Follower:
    """A collected reindeer trailing its leader in the chain."""

    x: float
    y: float
    index: int
    width: float = Player.WIDTH
    height: float = Player.HEIGHT
    target_x: float = field(init=False)
    target_y: float = field(init=False)

    def __post_init__(self) -> None:
        self.target_x = self.x
        self.target_y = self.y

    def update(self, leader: Leader, gap: float, smoothing: float) -> None:
        """Ease towards a fixed overlap with the leader's right edge."""
        self.target_x = leader.x + leader.width - gap
        self.target_y = leader.y

        self.x += (self.target_x - self.x) * smoothing
        self.y += (self.target_y - self.y) * smoothing


def update_chain(player: Player, followers: list[Follower], gap: float, smoothing: float) -> None:
    """Re-target every follower; index 0 follows the player."""
    leader: Leader = player
    for follower in followers:
        follower.update(leader, gap, smoothing)
        leader = follower
