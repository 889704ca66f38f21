"""Physics engine for Santa Rush.

Everything runs in frame units: positions in pixels, velocities in pixels
per frame. The integrator mutates entities in place and keeps no state of its
own besides its constants.
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol

from santa_rush.config.settings import PhysicsSettings


class Body(Protocol):
    """Anything the integrator can move vertically."""

    y: float
    velocity_y: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class Circle:
    """Circle given by its center and radius."""

    x: float
    y: float
    radius: float


class Physics:
    """Gravity/thrust integrator and overlap tests."""

    def __init__(self, settings: Optional[PhysicsSettings] = None):
        settings = settings or PhysicsSettings()
        self.gravity = settings.gravity
        self.thrust = settings.thrust
        self.max_velocity_up = settings.max_velocity_up
        self.max_velocity_down = settings.max_velocity_down

    def apply_gravity(self, body: Body) -> None:
        """Accelerate downwards, cap fall speed, then move."""
        body.velocity_y += self.gravity

        if body.velocity_y > self.max_velocity_down:
            body.velocity_y = self.max_velocity_down

        body.y += body.velocity_y

    def apply_thrust(self, body: Body) -> None:
        """Accelerate upwards and cap climb speed. Does not move the body."""
        body.velocity_y += self.thrust

        if body.velocity_y < self.max_velocity_up:
            body.velocity_y = self.max_velocity_up

    def check_bounds(self, body: Body, bounds_height: float) -> bool:
        """Clamp a body into ``[0, bounds_height - body.height]``.

        Returns:
            True if the body touched the ground (lower bound).
        """
        if body.y < 0:
            body.y = 0.0
            body.velocity_y = 0.0

        if body.y + body.height > bounds_height:
            body.y = bounds_height - body.height
            body.velocity_y = 0.0
            return True

        return False

    @staticmethod
    def check_collision(a: Rect, b: Rect) -> bool:
        """Strict rectangle overlap; touching edges do not collide."""
        return (
            a.x < b.x + b.width
            and a.x + a.width > b.x
            and a.y < b.y + b.height
            and a.y + a.height > b.y
        )

    @staticmethod
    def check_circle_collision(c1: Circle, c2: Circle) -> bool:
        """True iff the centers are closer than the sum of the radii."""
        distance = math.hypot(c1.x - c2.x, c1.y - c2.y)
        return distance < c1.radius + c2.radius
