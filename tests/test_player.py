"""Tests for the player and the follower chain."""

from types import SimpleNamespace

import pytest

from santa_rush.game.player import Follower, Player, update_chain


class TestPlayer:

    def test_hitbox_inside_visual_box(self):
        player = Player(100, 360)
        box, hitbox = player.bounds, player.hitbox
        assert hitbox.x > box.x and hitbox.right < box.right
        assert hitbox.y > box.y and hitbox.bottom < box.bottom
        assert hitbox.width == 50 and hitbox.height == 50

    def test_boosting_applies_thrust_and_gravity(self, physics):
        player = Player(100, 360)
        player.is_boosting = True
        player.update(physics, 720)
        assert player.velocity_y == pytest.approx(-0.25)
        assert player.y == pytest.approx(359.75)
        assert player.alive

    def test_falls_to_ground_and_dies(self, physics):
        player = Player(100, 600)
        for _ in range(100):
            player.update(physics, 720)
            if not player.alive:
                break
        assert not player.alive
        assert player.y == 640.0

    def test_ceiling_breach_kills(self, physics):
        player = Player(100, 1)
        player.velocity_y = -7.0
        player.is_boosting = True
        player.update(physics, 720)
        assert not player.alive
        assert player.y == 0.0

    def test_dead_player_does_not_move(self, physics):
        player = Player(100, 300)
        player.alive = False
        player.update(physics, 720)
        assert player.y == 300
        assert player.velocity_y == 0.0

    @pytest.mark.parametrize("velocity, rotation", [
        (0.0, 0.0),
        (8.0, 12.0),
        (-7.0, -10.5),
        (50.0, 60.0),
        (-20.0, -20.0),
    ])
    def test_rotation_follows_velocity(self, velocity, rotation):
        player = Player(0, 0)
        player.velocity_y = velocity
        assert player.rotation == pytest.approx(rotation)

    def test_reset(self, physics):
        player = Player(100, 600)
        player.is_boosting = True
        player.velocity_y = 5.0
        player.alive = False
        player.reset(100, 360)
        assert (player.x, player.y, player.velocity_y) == (100, 360, 0.0)
        assert player.alive and not player.is_boosting


class TestFollower:

    def test_targets_leader_right_edge_minus_gap(self):
        leader = SimpleNamespace(x=500.0, y=100.0, width=80.0)
        follower = Follower(x=0.0, y=100.0, index=0)
        follower.update(leader, gap=48, smoothing=0.2)
        assert follower.target_x == 532.0
        assert follower.target_y == 100.0
        assert follower.x == pytest.approx(106.4)

    def test_converges_without_overshoot(self):
        leader = SimpleNamespace(x=500.0, y=100.0, width=80.0)
        follower = Follower(x=0.0, y=100.0, index=0)
        previous = follower.x
        for _ in range(100):
            follower.update(leader, gap=48, smoothing=0.2)
            assert previous < follower.x <= 532.0
            previous = follower.x
        assert follower.x == pytest.approx(532.0, abs=1e-6)

    def test_chain_follows_previous_link(self):
        player = Player(100, 360)
        first = Follower(x=100.0, y=360.0, index=0)
        second = Follower(x=50.0, y=300.0, index=1)
        update_chain(player, [first, second], gap=48, smoothing=0.2)

        assert first.target_x == 132.0
        # The second link sees where the first link moved to this frame
        assert second.target_x == pytest.approx(first.x + first.width - 48)
        assert second.target_y == pytest.approx(first.y)

    def test_new_follower_starts_at_its_target(self):
        follower = Follower(x=10.0, y=20.0, index=3)
        assert (follower.target_x, follower.target_y) == (10.0, 20.0)
