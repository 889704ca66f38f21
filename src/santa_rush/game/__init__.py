"""Simulation core: entities, spawners, the round session and the frame loop."""

from santa_rush.game.player import Player, Follower
from santa_rush.game.obstacles import Obstacle, ObstacleManager
from santa_rush.game.collectibles import Pickup, PickupKind, CollectibleManager
from santa_rush.game.session import Session, SessionSnapshot, FrameReport, HitOutcome
from santa_rush.game.loop import GameLoop

__all__ = [
    "Player",
    "Follower",
    "Obstacle",
    "ObstacleManager",
    "Pickup",
    "PickupKind",
    "CollectibleManager",
    "Session",
    "SessionSnapshot",
    "FrameReport",
    "HitOutcome",
    "GameLoop",
]
