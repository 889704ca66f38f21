"""Pickups: reindeer that join the chain and gifts that give bonus points."""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from santa_rush.config.settings import PickupSettings
from santa_rush.core.physics import Physics, Rect, Circle
from santa_rush.game.difficulty import reindeer_spawn_interval, gift_spawn_interval
from santa_rush.game.player import Player, Follower

logger = logging.getLogger(__name__)


class PickupKind(Enum):
    """What a pickup is, which decides its shape and its effect."""

    REINDEER = auto()  # Circle; grows the chain
    GIFT = auto()      # Box centred on (x, y); bonus points


@dataclass
class Pickup:
    """A passive pickup drifting left.

    ``size`` is the radius for a reindeer and the box side for a gift.
    """

    kind: PickupKind
    x: float
    y: float
    size: float
    speed: float = 2.5
    collected: bool = False
    rotation: float = 0.0  # cosmetic, gifts only

    GIFT_SPIN = 0.05

    @property
    def box(self) -> Rect:
        half = self.size / 2
        return Rect(self.x - half, self.y - half, self.size, self.size)

    @property
    def circle(self) -> Circle:
        return Circle(self.x, self.y, self.size)

    def update(self) -> None:
        self.x -= self.speed
        if self.kind is PickupKind.GIFT:
            self.rotation += self.GIFT_SPIN

    def is_off_screen(self) -> bool:
        return self.x + self.size < 0

    def check_collection(self, player: Player, physics: Physics) -> bool:
        """Mark as collected on first contact with the player's hitbox."""
        if self.collected:
            return False

        if self.kind is PickupKind.REINDEER:
            touching = physics.check_circle_collision(player.hitbox_circle, self.circle)
        else:
            touching = physics.check_collision(self.box, player.hitbox)

        if touching:
            self.collected = True
        return touching


class CollectibleManager:
    """Timer-driven spawner for both pickup kinds."""

    SEAT_SPACING = 50.0

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        settings: Optional[PickupSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or PickupSettings()
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self._rng = rng or random.Random()
        self.pickups: list[Pickup] = []
        self.spawn_timer = 0
        self.spawn_interval = self.settings.reindeer_initial_interval
        self.gift_spawn_timer = 0
        self.gift_spawn_interval = self.settings.gift_initial_interval

    def reset(self) -> None:
        self.pickups = []
        self.spawn_timer = 0
        self.spawn_interval = self.settings.reindeer_initial_interval
        self.gift_spawn_timer = 0
        self.gift_spawn_interval = self.settings.gift_initial_interval

    def update(
        self,
        physics: Physics,
        player: Player,
        followers: list[Follower],
        score: int,
    ) -> bool:
        """Advance one frame.

        Reindeer pickups append followers in place; gift pickups are reported
        through the return value.

        Returns:
            True if at least one gift was collected this frame.
        """
        self.spawn_timer += 1
        self.gift_spawn_timer += 1

        if self.spawn_timer >= self.spawn_interval:
            self.spawn(PickupKind.REINDEER)
            self.spawn_timer = 0
            self.spawn_interval = reindeer_spawn_interval(score, self.settings)

        if self.gift_spawn_timer >= self.gift_spawn_interval:
            self.spawn(PickupKind.GIFT)
            self.gift_spawn_timer = 0
            self.gift_spawn_interval = gift_spawn_interval(score, self.settings)

        gift_collected = False
        for pickup in self.pickups:
            pickup.update()

            if not pickup.check_collection(player, physics):
                continue

            if pickup.kind is PickupKind.GIFT:
                gift_collected = True
                logger.debug("Gift collected")
            else:
                followers.append(self._seat_follower(player, followers))
                logger.debug(f"Reindeer collected, chain length {len(followers)}")

        self.pickups = [p for p in self.pickups if not p.collected and not p.is_off_screen()]
        return gift_collected

    def _seat_follower(self, player: Player, followers: list[Follower]) -> Follower:
        """New follower starts behind the tail of the chain, level with the player."""
        index = len(followers)
        return Follower(x=player.x - index * self.SEAT_SPACING, y=player.y, index=index)

    def spawn(self, kind: PickupKind) -> Pickup:
        margin = self.settings.spawn_margin
        size = self.settings.reindeer_radius if kind is PickupKind.REINDEER else self.settings.gift_size
        pickup = Pickup(
            kind=kind,
            x=self.canvas_width + self.settings.spawn_offset,
            y=self._rng.uniform(margin, self.canvas_height - margin),
            size=size,
            speed=self.settings.speed,
        )
        self.pickups.append(pickup)
        logger.debug(f"{kind.name.lower()} spawned at y={pickup.y:.0f}")
        return pickup
