"""Gap pillars and their spawner."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from santa_rush.config.settings import ObstacleSettings
from santa_rush.core.physics import Rect
from santa_rush.game.difficulty import difficulty_level, gap_size_for, obstacle_speed_for

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A pillar pair with a passable gap between ``gap_y`` and ``gap_bottom``."""

    x: float
    gap_y: float
    gap_size: float
    speed: float
    width: float = 60.0
    passed: bool = False

    @property
    def gap_bottom(self) -> float:
        return self.gap_y + self.gap_size

    @property
    def right(self) -> float:
        return self.x + self.width

    def update(self) -> None:
        self.x -= self.speed

    def is_off_screen(self) -> bool:
        return self.x + self.width < 0

    def check_collision(self, player: Rect) -> bool:
        """Player overlaps the pillar columns and is not fully inside the gap."""
        if player.x + player.width > self.x and player.x < self.x + self.width:
            if player.y < self.gap_y or player.y + player.height > self.gap_bottom:
                return True
        return False

    def has_passed(self, player_x: float) -> bool:
        """True exactly once: the first frame the right edge is behind the player."""
        if not self.passed and self.x + self.width < player_x:
            self.passed = True
            return True
        return False


class ObstacleManager:
    """Spawns obstacles at a fixed spacing and scales them with the score."""

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        settings: Optional[ObstacleSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or ObstacleSettings()
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self._rng = rng or random.Random()
        self.obstacles: list[Obstacle] = []
        self.last_spawn_x = canvas_width
        self.difficulty_level = 1

    @property
    def spawn_distance(self) -> float:
        return self.settings.spawn_distance

    @property
    def min_gap_y(self) -> float:
        return self.settings.gap_margin

    def max_gap_y(self, gap_size: float) -> float:
        return self.canvas_height - gap_size - self.settings.gap_margin

    def reset(self) -> None:
        self.obstacles = []
        self.last_spawn_x = self.canvas_width
        self.difficulty_level = 1

    def update(self, score: int) -> None:
        """Advance one frame: spawn, move, rescale speed, prune."""
        self.difficulty_level = difficulty_level(score, self.settings)
        gap_size = gap_size_for(self.difficulty_level, self.settings)
        speed = obstacle_speed_for(self.difficulty_level, self.settings)

        if not self.obstacles or self.last_spawn_x - self.obstacles[-1].x > self.spawn_distance:
            self._spawn(gap_size, speed)

        # Speed is global; gap size stays as spawned
        for obstacle in self.obstacles:
            obstacle.update()
            obstacle.speed = speed

        self.obstacles = [o for o in self.obstacles if not o.is_off_screen()]

    def _spawn(self, gap_size: float, speed: float) -> Obstacle:
        gap_y = self._rng.uniform(self.min_gap_y, self.max_gap_y(gap_size))
        obstacle = Obstacle(
            x=self.last_spawn_x,
            gap_y=gap_y,
            gap_size=gap_size,
            speed=speed,
            width=self.settings.width,
        )
        self.obstacles.append(obstacle)
        self.last_spawn_x += self.spawn_distance
        logger.debug(
            f"Obstacle spawned at x={obstacle.x:.0f} gap={gap_y:.0f}+{gap_size:.0f} "
            f"(level {self.difficulty_level})"
        )
        return obstacle

    def check_collisions(self, player: Rect) -> bool:
        return any(obstacle.check_collision(player) for obstacle in self.obstacles)

    def check_score(self, player_x: float) -> int:
        """Points earned this frame; every obstacle is checked."""
        return sum(1 for obstacle in self.obstacles if obstacle.has_passed(player_x))
