"""
Hold-to-fly input for the simulator.

The window presses and releases the button from keyboard, mouse and touch
events; the game loop only samples ``is_held`` once per frame.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class HoldButton:
    """
    The single boost button.

    Several physical sources (SPACE, ENTER, mouse, touch) may hold it at the
    same time; it stays held until every source has released it.
    """

    def __init__(self) -> None:
        self._sources: set[str] = set()
        self._press_callbacks: list[Callable[[], None]] = []
        self._release_callbacks: list[Callable[[], None]] = []

    def is_held(self) -> bool:
        return bool(self._sources)

    def on_press(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._press_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._press_callbacks:
                self._press_callbacks.remove(callback)

        return unsubscribe

    def on_release(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._release_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._release_callbacks:
                self._release_callbacks.remove(callback)

        return unsubscribe

    def press(self, source: str = "key") -> None:
        """Called by the window when a source goes down."""
        was_held = self.is_held()
        self._sources.add(source)
        if not was_held:
            self._notify(self._press_callbacks)

    def release(self, source: str = "key") -> None:
        """Called by the window when a source goes up."""
        if source not in self._sources:
            return
        self._sources.discard(source)
        if not self._sources:
            self._notify(self._release_callbacks)

    def release_all(self) -> None:
        """Drop every source, e.g. when the window loses focus."""
        if self._sources:
            self._sources.clear()
            self._notify(self._release_callbacks)

    @staticmethod
    def _notify(callbacks: list[Callable[[], None]]) -> None:
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in button callback: {e}")
