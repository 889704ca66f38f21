"""Difficulty curve: everything that scales with the score."""

from santa_rush.config.settings import ObstacleSettings, PickupSettings


def difficulty_level(score: int, settings: ObstacleSettings) -> int:
    """Level 1 at score 0, one more every ``difficulty_step`` points."""
    return 1 + score // settings.difficulty_step


def gap_size_for(level: int, settings: ObstacleSettings) -> float:
    """Gap height for newly spawned obstacles. Shrinks down to a floor."""
    return max(
        settings.min_gap_size,
        settings.base_gap_size - settings.gap_shrink_per_level * level,
    )


def obstacle_speed_for(level: int, settings: ObstacleSettings) -> float:
    """Scroll speed shared by all live obstacles."""
    return settings.base_speed + settings.speed_per_level * level


def reindeer_spawn_interval(score: int, settings: PickupSettings) -> int:
    return max(
        settings.reindeer_min_interval,
        settings.reindeer_base_interval - score // settings.reindeer_score_divisor,
    )


def gift_spawn_interval(score: int, settings: PickupSettings) -> int:
    return max(
        settings.gift_min_interval,
        settings.gift_base_interval - score // settings.gift_score_divisor,
    )
