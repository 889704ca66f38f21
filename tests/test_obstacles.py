"""Tests for obstacles, their spawner and the difficulty curve."""

import random

import pytest

from santa_rush.config.settings import ObstacleSettings, PickupSettings
from santa_rush.core.physics import Rect
from santa_rush.game.difficulty import (
    difficulty_level, gap_size_for, gift_spawn_interval, obstacle_speed_for, reindeer_spawn_interval,
)
from santa_rush.game.obstacles import Obstacle, ObstacleManager


@pytest.fixture
def manager():
    return ObstacleManager(1280, 720, ObstacleSettings(), random.Random(42))


class TestObstacle:

    def test_player_inside_gap_is_safe(self):
        obstacle = Obstacle(x=100, gap_y=200, gap_size=200, speed=2.5)
        assert not obstacle.check_collision(Rect(80, 250, 80, 80))

    def test_player_above_gap_collides(self):
        obstacle = Obstacle(x=100, gap_y=200, gap_size=200, speed=2.5)
        assert obstacle.check_collision(Rect(80, 150, 80, 80))

    def test_player_below_gap_collides(self):
        obstacle = Obstacle(x=100, gap_y=200, gap_size=200, speed=2.5)
        assert obstacle.check_collision(Rect(80, 330, 80, 80))

    def test_no_horizontal_overlap(self):
        obstacle = Obstacle(x=100, gap_y=200, gap_size=200, speed=2.5)
        assert not obstacle.check_collision(Rect(300, 0, 80, 80))
        assert not obstacle.check_collision(Rect(20, 0, 80, 80))

    def test_passed_flips_once(self):
        obstacle = Obstacle(x=10, gap_y=200, gap_size=200, speed=2.5)
        assert obstacle.has_passed(100)
        assert obstacle.passed
        assert not obstacle.has_passed(100)

    def test_right_edge_on_player_is_not_passed(self):
        obstacle = Obstacle(x=40, gap_y=200, gap_size=200, speed=2.5)
        assert not obstacle.has_passed(100)

    def test_off_screen(self):
        assert Obstacle(x=-61, gap_y=0, gap_size=0, speed=0).is_off_screen()
        assert not Obstacle(x=-60, gap_y=0, gap_size=0, speed=0).is_off_screen()


class TestObstacleManager:

    def test_first_spawn_at_canvas_edge(self, manager):
        manager.update(0)
        assert len(manager.obstacles) == 1
        assert manager.obstacles[0].x == pytest.approx(1280 - 2.65)
        assert manager.last_spawn_x == 1680

    def test_spawn_origins_are_spawn_distance_apart(self, manager):
        origins = []
        for _ in range(10):
            count = len(manager.obstacles)
            manager.update(0)
            if len(manager.obstacles) > count:
                origins.append(manager.last_spawn_x - manager.spawn_distance)
        assert len(origins) >= 2
        assert all(b - a == 400 for a, b in zip(origins, origins[1:]))

    def test_gap_stays_inside_margins(self, manager):
        for _ in range(200):
            manager.update(0)
        assert manager.obstacles
        for obstacle in manager.obstacles:
            assert 100 <= obstacle.gap_y <= 720 - obstacle.gap_size - 100

    def test_speed_is_global_but_gap_is_kept(self, manager):
        manager.update(0)
        first = manager.obstacles[0]
        assert first.gap_size == 197

        manager.update(45)
        assert manager.difficulty_level == 4
        assert first.speed == pytest.approx(3.1)
        assert first.gap_size == 197
        assert manager.obstacles[-1].gap_size == 188

    def test_prunes_off_screen(self, manager):
        manager.obstacles = [Obstacle(x=-59, gap_y=200, gap_size=200, speed=2.65)]
        manager.update(0)
        assert all(o.x + o.width >= 0 for o in manager.obstacles)
        assert all(o.x > 0 for o in manager.obstacles)

    def test_check_score_counts_every_obstacle(self, manager):
        manager.obstacles = [
            Obstacle(x=0, gap_y=200, gap_size=200, speed=0),
            Obstacle(x=10, gap_y=200, gap_size=200, speed=0),
            Obstacle(x=500, gap_y=200, gap_size=200, speed=0),
        ]
        assert manager.check_score(100) == 2
        assert manager.check_score(100) == 0

    def test_check_collisions(self, manager):
        manager.obstacles = [Obstacle(x=100, gap_y=100, gap_size=150, speed=0)]
        assert manager.check_collisions(Rect(100, 360, 80, 80))
        assert not manager.check_collisions(Rect(100, 120, 80, 80))

    def test_reset(self, manager):
        for _ in range(5):
            manager.update(30)
        manager.reset()
        assert manager.obstacles == []
        assert manager.last_spawn_x == 1280
        assert manager.difficulty_level == 1


class TestDifficulty:

    def test_score_zero(self):
        s = ObstacleSettings()
        assert difficulty_level(0, s) == 1
        assert gap_size_for(1, s) == 197
        assert obstacle_speed_for(1, s) == pytest.approx(2.65)

    def test_score_45(self):
        s = ObstacleSettings()
        level = difficulty_level(45, s)
        assert level == 4
        assert gap_size_for(level, s) == 188
        assert reindeer_spawn_interval(45, PickupSettings()) == 105
        assert gift_spawn_interval(45, PickupSettings()) == 291

    def test_floors(self):
        s = ObstacleSettings()
        assert gap_size_for(difficulty_level(10_000, s), s) == 150
        assert reindeer_spawn_interval(10_000, PickupSettings()) == 60
        assert gift_spawn_interval(10_000, PickupSettings()) == 200
