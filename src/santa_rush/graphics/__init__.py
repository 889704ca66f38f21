"""Rendering for Santa Rush."""

from santa_rush.graphics.renderer import SessionRenderer

__all__ = ["SessionRenderer"]
