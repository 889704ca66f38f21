"""
Application flow for Santa Rush.

    MENU ──> PLAYING <──> GAME_OVER
                ^  │           │
                └──┘ restart   └──> MENU

The game loop starts a round straight away and restarts it automatically
after a death, so MENU is only seen before the first round.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class StateContext:
    """What the GAME_OVER screen and the next round need to know."""
    last_score: int = 0
    last_followers: int = 0
    rounds_played: int = 0


StateListener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Tracks the current State and refuses transitions missing from the table.

    Listeners are called with ``(old, new, context)`` after the switch.
    """

    VALID_TRANSITIONS: dict[State, frozenset[State]] = {
        State.MENU: frozenset({State.PLAYING}),
        State.PLAYING: frozenset({State.GAME_OVER, State.PLAYING}),
        State.GAME_OVER: frozenset({State.PLAYING, State.MENU}),
    }

    def __init__(self, initial_state: State = State.MENU) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[StateListener] = []
        logger.debug(f"StateMachine starting in {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in self.VALID_TRANSITIONS.get(self._state, frozenset())

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Switch to ``to_state`` if the table allows it.

        Args:
            to_state: Target state
            **context_updates: StateContext fields to overwrite; unknown names are ignored

        Returns:
            False if the transition was refused
        """
        if not self.can_transition(to_state):
            logger.warning(f"Refusing transition {self._state.name} -> {to_state.name}")
            return False

        old_state, self._state = self._state, to_state
        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"{old_state.name} -> {to_state.name}")
        for listener in list(self._listeners):
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"State listener failed: {e}")
        return True

    def add_listener(self, callback: StateListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
