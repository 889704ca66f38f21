"""Round state and the per-frame simulation step.

A Session owns everything that changes during a round: the player, the
follower chain, both spawners, the score and the frame counters. Nothing here
blocks, allocates threads or reads rendering state.
"""

import copy
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from santa_rush.config.settings import Settings
from santa_rush.core.errors import ConfigurationError
from santa_rush.core.events import Event, EventBus, EventType
from santa_rush.core.physics import Physics
from santa_rush.game.collectibles import CollectibleManager, Pickup
from santa_rush.game.difficulty import gap_size_for
from santa_rush.game.obstacles import Obstacle, ObstacleManager
from santa_rush.game.player import Follower, Player, update_chain

logger = logging.getLogger(__name__)


class HitOutcome(Enum):
    """What an obstacle collision did this frame."""

    NONE = auto()
    IGNORED = auto()         # Invincible
    FOLLOWERS_LOST = auto()
    FATAL = auto()


@dataclass
class FrameReport:
    """Summary of one update, mostly for the loop and for tests."""

    points: int = 0
    bonus: int = 0
    hit: HitOutcome = HitOutcome.NONE
    followers_lost: int = 0
    followers_gained: int = 0
    died: bool = False


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    rotation: float
    boosting: bool
    alive: bool


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of the entities a renderer needs."""

    canvas_width: int
    canvas_height: int
    frame: int
    score: int
    invincibility_timer: int
    background_offset: float
    player: PlayerView
    followers: tuple[Follower, ...] = field(default_factory=tuple)
    obstacles: tuple[Obstacle, ...] = field(default_factory=tuple)
    pickups: tuple[Pickup, ...] = field(default_factory=tuple)

    @property
    def invincible(self) -> bool:
        return self.invincibility_timer > 0


def validate_canvas(settings: Settings) -> None:
    """Reject canvases too small to place gaps, pickups and the player."""
    width = settings.display.canvas_width
    height = settings.display.canvas_height

    widest_gap = gap_size_for(1, settings.obstacles)
    if height - widest_gap - settings.obstacles.gap_margin < settings.obstacles.gap_margin:
        raise ConfigurationError(
            f"Canvas height {height} leaves no room for a {widest_gap:.0f}px gap "
            f"with {settings.obstacles.gap_margin:.0f}px margins"
        )
    if height - settings.pickups.spawn_margin < settings.pickups.spawn_margin:
        raise ConfigurationError(f"Canvas height {height} is too small for pickup spawns")
    if height < Player.HEIGHT:
        raise ConfigurationError(f"Canvas height {height} is smaller than the player")
    if width <= Session.PLAYER_START_X + Player.WIDTH:
        raise ConfigurationError(f"Canvas width {width} is too narrow")


class Session:
    """A single round of Santa Rush."""

    PLAYER_START_X = 100.0
    BACKGROUND_SPEED = 1.0
    BACKGROUND_WRAP = -50.0

    def __init__(
        self,
        settings: Settings,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        validate_canvas(settings)

        self.settings = settings
        self.event_bus = event_bus
        self._rng = rng or random.Random()

        self.canvas_width = settings.display.canvas_width
        self.canvas_height = settings.display.canvas_height

        self.physics = Physics(settings.physics)
        self.player = Player(self.PLAYER_START_X, self.canvas_height / 2)
        self.followers: list[Follower] = []
        self.obstacle_manager = ObstacleManager(
            self.canvas_width, self.canvas_height, settings.obstacles, self._rng
        )
        self.collectible_manager = CollectibleManager(
            self.canvas_width, self.canvas_height, settings.pickups, self._rng
        )

        self.score = 0
        self.invincibility_timer = 0
        self.frame = 0
        self.background_offset = 0.0

    @property
    def alive(self) -> bool:
        return self.player.alive

    @property
    def follower_count(self) -> int:
        return len(self.followers)

    def reset(self) -> None:
        """Start a fresh round, keeping settings, RNG and bus."""
        self.player.reset(self.PLAYER_START_X, self.canvas_height / 2)
        self.followers.clear()
        self.obstacle_manager.reset()
        self.collectible_manager.reset()
        self.score = 0
        self.invincibility_timer = 0
        self.frame = 0
        self.background_offset = 0.0
        logger.info("Session reset")

    def update(self, boosting: bool) -> FrameReport:
        """Advance the round by one frame.

        Args:
            boosting: Whether the hold-to-fly input is held this frame

        Returns:
            What happened during the frame. A dead session does nothing.
        """
        report = FrameReport()
        if not self.player.alive:
            return report

        self.frame += 1

        self.player.is_boosting = boosting
        self.player.update(self.physics, self.canvas_height)
        if not self.player.alive:
            return self._die(report, cause="boundary")

        self.obstacle_manager.update(self.score)

        report.points = self.obstacle_manager.check_score(self.player.x)
        if report.points:
            self.score += report.points
            self._emit(EventType.OBSTACLE_PASSED, points=report.points, score=self.score)

        if self.obstacle_manager.check_collisions(self.player.bounds):
            if self.invincibility_timer > 0:
                report.hit = HitOutcome.IGNORED
            elif self.followers:
                report.hit = HitOutcome.FOLLOWERS_LOST
                report.followers_lost = self._lose_followers()
            else:
                report.hit = HitOutcome.FATAL
                self.player.alive = False
                return self._die(report, cause="obstacle")

        # The hit frame is not counted; the window covers the next 30 frames
        if self.invincibility_timer > 0 and report.hit is not HitOutcome.FOLLOWERS_LOST:
            self.invincibility_timer -= 1

        chain_before = len(self.followers)
        if self.collectible_manager.update(self.physics, self.player, self.followers, self.score):
            report.bonus = self.settings.pickups.gift_bonus
            self.score += report.bonus
            self._emit(EventType.GIFT_COLLECTED, bonus=report.bonus, score=self.score)

        report.followers_gained = len(self.followers) - chain_before
        if report.followers_gained:
            self._emit(EventType.FOLLOWER_ADDED, followers=len(self.followers))

        update_chain(
            self.player,
            self.followers,
            self.settings.chain.gap,
            self.settings.chain.smoothing,
        )

        self.background_offset -= self.BACKGROUND_SPEED
        if self.background_offset <= self.BACKGROUND_WRAP:
            self.background_offset = 0.0

        return report

    def _lose_followers(self) -> int:
        """Drop the newest followers and start the invincibility window."""
        lose_count = min(self.settings.chain.followers_lost_per_hit, len(self.followers))
        del self.followers[len(self.followers) - lose_count:]
        self.invincibility_timer = self.settings.chain.invincibility_frames

        logger.debug(f"Hit obstacle, lost {lose_count} followers ({len(self.followers)} left)")
        self._emit(EventType.FOLLOWERS_LOST, lost=lose_count, followers=len(self.followers))
        return lose_count

    def _die(self, report: FrameReport, cause: str) -> FrameReport:
        report.died = True
        logger.info(f"Player died ({cause}) with score {self.score}")
        self._emit(EventType.PLAYER_DIED, cause=cause, score=self.score, followers=len(self.followers))
        return report

    def _emit(self, event_type: EventType, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="session"))

    def snapshot(self) -> SessionSnapshot:
        """Copy the drawable state; the renderer never sees live entities."""
        player = self.player
        return SessionSnapshot(
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
            frame=self.frame,
            score=self.score,
            invincibility_timer=self.invincibility_timer,
            background_offset=self.background_offset,
            player=PlayerView(
                x=player.x,
                y=player.y,
                width=player.width,
                height=player.height,
                rotation=player.rotation,
                boosting=player.is_boosting,
                alive=player.alive,
            ),
            followers=tuple(copy.copy(f) for f in self.followers),
            obstacles=self._visible_obstacles(),
            pickups=tuple(copy.copy(p) for p in self.collectible_manager.pickups),
        )

    def _visible_obstacles(self) -> tuple[Obstacle, ...]:
        """Copies of on-screen obstacles plus the next one queued to the right."""
        visible = []
        for obstacle in self.obstacle_manager.obstacles:
            visible.append(copy.copy(obstacle))
            if obstacle.x >= self.canvas_width:
                break
        return tuple(visible)
