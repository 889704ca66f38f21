"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups can be overridden with a double underscore, e.g.
``SANTA_RUSH_DISPLAY__CANVAS_WIDTH=800``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """Canvas and window settings."""

    # Simulation canvas (pixels)
    canvas_width: int = Field(default=1280, gt=0)
    canvas_height: int = Field(default=720, gt=0)

    # Rendering
    fps: int = 60
    window_scale: float = Field(default=1.0, gt=0.0)
    fullscreen: bool = False


class PhysicsSettings(BaseSettings):
    """Integrator constants, all in pixels per frame."""

    gravity: float = 0.25
    thrust: float = -0.5
    max_velocity_up: float = -7.0
    max_velocity_down: float = 8.0


class ObstacleSettings(BaseSettings):
    """Pillar geometry and the difficulty curve."""

    width: float = 60.0
    spawn_distance: float = 400.0
    gap_margin: float = 100.0

    # level = 1 + score // difficulty_step
    difficulty_step: int = 15
    base_gap_size: float = 200.0
    gap_shrink_per_level: float = 3.0
    min_gap_size: float = 150.0
    base_speed: float = 2.5
    speed_per_level: float = 0.15


class PickupSettings(BaseSettings):
    """Reindeer and gift pickups."""

    reindeer_radius: float = 15.0
    gift_size: float = 30.0
    speed: float = 2.5
    spawn_offset: float = 50.0
    spawn_margin: float = 100.0

    # Reindeer: first interval, then max(floor, base - score // divisor)
    reindeer_initial_interval: int = 100
    reindeer_base_interval: int = 120
    reindeer_min_interval: int = 60
    reindeer_score_divisor: int = 3

    gift_initial_interval: int = 300
    gift_base_interval: int = 300
    gift_min_interval: int = 200
    gift_score_divisor: int = 5

    gift_bonus: int = 5


class ChainSettings(BaseSettings):
    """Follower chain behaviour and hit penalties."""

    gap: float = 48.0
    smoothing: float = Field(default=0.2, gt=0.0, le=1.0)
    followers_lost_per_hit: int = 2
    invincibility_frames: int = 30
    restart_delay_frames: int = 120  # 2 seconds at 60 fps


class ScoreSettings(BaseSettings):
    """Leaderboard backend and local fallback."""

    api_url: str = "http://localhost:8080/api"
    request_timeout: float = 5.0
    local_path: Path = Field(default_factory=lambda: Path.home() / ".santa_rush" / "scores.json")
    local_keep: int = 50
    server_keep: int = 100

    server_host: str = "0.0.0.0"
    server_port: int = 8080


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SANTA_RUSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    player_name: str = "Player"

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    pickups: PickupSettings = Field(default_factory=PickupSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    scores: ScoreSettings = Field(default_factory=ScoreSettings)

    @property
    def window_size(self) -> tuple[int, int]:
        """Window size after scaling the canvas."""
        scale = self.display.window_scale
        return (
            int(self.display.canvas_width * scale),
            int(self.display.canvas_height * scale),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
