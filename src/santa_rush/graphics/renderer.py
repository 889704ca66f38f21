"""Draws session snapshots into an RGB frame buffer."""

import logging

import numpy as np

from santa_rush.game.collectibles import PickupKind
from santa_rush.game.session import SessionSnapshot
from santa_rush.graphics.primitives import (
    Buffer, blend, draw_circle, draw_rect, new_buffer, vertical_gradient,
)

logger = logging.getLogger(__name__)


class SessionRenderer:
    """Flat-shaded renderer for the simulation.

    Owns a (height, width, 3) uint8 buffer that a window can blit. It only
    reads snapshots; nothing is written back into the game.
    """

    SKY_TOP = (135, 206, 235)
    SKY_BOTTOM = (224, 246, 255)
    SNOW = (245, 250, 255)

    PILLAR = (139, 69, 19)
    PILLAR_CAP = (101, 67, 33)
    CAP_HEIGHT = 20
    CAP_OVERHANG = 5

    SANTA = (220, 20, 20)
    SANTA_FACE = (255, 212, 163)
    REINDEER = (139, 69, 19)
    REINDEER_HEAD = (160, 82, 45)
    NOSE = (255, 0, 0)
    GIFT = (255, 0, 0)
    RIBBON = (255, 215, 0)

    STRIPE_SPACING = 50
    FLASH_PERIOD = 6  # frames

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer: Buffer = new_buffer(width, height)
        self._background = new_buffer(width, height)
        vertical_gradient(self._background, self.SKY_TOP, self.SKY_BOTTOM)

    def render(self, snapshot: SessionSnapshot) -> None:
        buf = self.buffer
        np.copyto(buf, self._background)
        self._draw_snowfall(buf, snapshot.background_offset)

        for pickup in snapshot.pickups:
            if pickup.kind is PickupKind.REINDEER:
                draw_circle(buf, pickup.x, pickup.y, pickup.size, self.REINDEER)
                draw_circle(buf, pickup.x + pickup.size * 0.5, pickup.y - pickup.size * 0.3,
                            pickup.size * 0.6, self.REINDEER_HEAD)
                draw_circle(buf, pickup.x + pickup.size * 0.8, pickup.y - pickup.size * 0.2,
                            max(2.0, pickup.size * 0.2), self.NOSE)
            else:
                box = pickup.box
                draw_rect(buf, box.x, box.y, box.width, box.height, self.GIFT)
                draw_rect(buf, box.x, pickup.y - 3, box.width, 6, self.RIBBON)
                draw_rect(buf, pickup.x - 3, box.y, 6, box.height, self.RIBBON)

        for obstacle in snapshot.obstacles:
            if obstacle.x > self.width:
                continue
            draw_rect(buf, obstacle.x, 0, obstacle.width, obstacle.gap_y, self.PILLAR)
            draw_rect(buf, obstacle.x - self.CAP_OVERHANG, obstacle.gap_y - self.CAP_HEIGHT,
                      obstacle.width + 2 * self.CAP_OVERHANG, self.CAP_HEIGHT, self.PILLAR_CAP)
            draw_rect(buf, obstacle.x, obstacle.gap_bottom, obstacle.width,
                      self.height - obstacle.gap_bottom, self.PILLAR)
            draw_rect(buf, obstacle.x - self.CAP_OVERHANG, obstacle.gap_bottom,
                      obstacle.width + 2 * self.CAP_OVERHANG, self.CAP_HEIGHT, self.PILLAR_CAP)

        for follower in snapshot.followers:
            draw_rect(buf, follower.x, follower.y, follower.width, follower.height * 0.7, self.REINDEER)
            draw_circle(buf, follower.x + follower.width / 2, follower.y + follower.height / 3,
                        follower.width / 2.5, self.REINDEER_HEAD)
            draw_circle(buf, follower.x + follower.width / 2, follower.y + follower.height / 3 + 5,
                        3, self.NOSE)

        flashing = snapshot.invincible and (snapshot.frame // self.FLASH_PERIOD) % 2 == 0
        if not flashing:
            self._draw_player(buf, snapshot)

        if not snapshot.player.alive:
            blend(buf, (0, 0, 0), 0.6)

    def _draw_player(self, buf: Buffer, snapshot: SessionSnapshot) -> None:
        p = snapshot.player
        # Lean the body by the derived rotation (a shear stand-in for rotation)
        lean = p.rotation / 60.0 * 8.0
        draw_rect(buf, p.x + lean, p.y + p.height * 0.3, p.width, p.height * 0.7, self.SANTA)
        draw_circle(buf, p.x + p.width / 2, p.y + p.height * 0.3, p.width / 3, self.SANTA_FACE)
        draw_rect(buf, p.x + p.width * 0.2 - lean, p.y, p.width * 0.6, p.height * 0.15, self.SANTA)
        if p.boosting:
            draw_circle(buf, p.x + 4, p.y + p.height, 8, self.RIBBON)

    def _draw_snowfall(self, buf: Buffer, offset: float) -> None:
        """Parallax snow dots scrolling with the background offset."""
        start = int(offset) % self.STRIPE_SPACING
        for x in range(start, self.width, self.STRIPE_SPACING):
            for y in range(25, self.height, self.STRIPE_SPACING * 2):
                draw_rect(buf, x, y + (x // self.STRIPE_SPACING % 2) * self.STRIPE_SPACING, 3, 3, self.SNOW)
