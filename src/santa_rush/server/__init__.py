"""Leaderboard server for Santa Rush."""

from santa_rush.server.app import ScoreBoard, create_app

__all__ = ["ScoreBoard", "create_app"]
