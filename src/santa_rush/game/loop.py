"""Frame orchestration: input, update, draw, and the round lifecycle."""

import asyncio
import logging
from typing import Any, Coroutine, Optional, Protocol

from santa_rush.config.settings import Settings
from santa_rush.core.events import Event, EventBus, EventType, tick_event
from santa_rush.core.state import State, StateMachine
from santa_rush.game.session import FrameReport, Session, SessionSnapshot
from santa_rush.scores.store import ScoreStore

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    """The single "boost held" signal, sampled once per frame."""

    def is_held(self) -> bool:
        ...


class SnapshotRenderer(Protocol):
    """Draws a snapshot. Must not touch the session."""

    def render(self, snapshot: SessionSnapshot) -> None:
        ...


class GameLoop:
    """Drives one update and one draw per frame.

    Rounds start immediately. When the player dies the loop saves the high
    score, submits the round in the background and restarts after
    ``restart_delay_frames``.
    """

    def __init__(
        self,
        settings: Settings,
        input_source: InputSource,
        score_store: ScoreStore,
        renderer: Optional[SnapshotRenderer] = None,
        event_bus: Optional[EventBus] = None,
        state_machine: Optional[StateMachine] = None,
        session: Optional[Session] = None,
    ):
        self.settings = settings
        self.input_source = input_source
        self.score_store = score_store
        self.renderer = renderer
        self.event_bus = event_bus or EventBus()
        self.state_machine = state_machine or StateMachine()
        self.session = session or Session(settings, event_bus=self.event_bus)

        self.high_score = score_store.get_high_score()
        self.frame_count = 0
        self.restart_countdown = 0
        self.last_report = FrameReport()
        self._background_tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> State:
        return self.state_machine.state

    def start(self) -> None:
        """Probe the backend and begin the first round."""
        self._run_in_background(self._check_backend())
        self.start_round()

    def start_round(self) -> None:
        self.session.reset()
        self.restart_countdown = 0
        self.state_machine.transition(State.PLAYING)
        self.event_bus.emit(Event(EventType.ROUND_STARTED, source="loop"))
        logger.info("Round started")

    def tick(self) -> FrameReport:
        """One frame: update then draw."""
        self.update()
        self.draw()
        self.frame_count += 1
        self.event_bus.emit(tick_event(self.frame_count))
        return self.last_report

    def update(self) -> None:
        if self.state is State.PLAYING:
            self.last_report = self.session.update(self.input_source.is_held())
            if self.last_report.died:
                self.end_round()
        elif self.state is State.GAME_OVER:
            self.last_report = FrameReport()
            self.restart_countdown -= 1
            if self.restart_countdown <= 0:
                self.start_round()

    def draw(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.session.snapshot())

    def end_round(self) -> None:
        """Record the finished round and schedule the restart."""
        score = self.session.score
        followers = self.session.follower_count

        self.state_machine.transition(
            State.GAME_OVER,
            last_score=score,
            last_followers=followers,
            rounds_played=self.state_machine.context.rounds_played + 1,
        )
        self.restart_countdown = self.settings.chain.restart_delay_frames

        if self.score_store.save_high_score(score):
            self.high_score = score
            self.event_bus.emit(Event(EventType.NEW_HIGH_SCORE, data={"score": score}, source="loop"))

        self.event_bus.emit(Event(
            EventType.ROUND_ENDED,
            data={"score": score, "followers": followers},
            source="loop",
        ))
        logger.info(f"Round over: score {score}, {followers} reindeer")

        self._run_in_background(
            self.score_store.submit_score(self.settings.player_name, score, followers)
        )

    async def _check_backend(self) -> None:
        available = await self.score_store.check_backend()
        logger.info(f"Score backend {'available' if available else 'unavailable, using local storage'}")

    def _run_in_background(self, coro: Coroutine[Any, Any, Any]) -> None:
        """Fire and forget; the frame never waits on I/O."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, dropping background task")
            coro.close()
            return

        task = loop.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Background task failed: {task.exception()}")

    async def drain(self) -> None:
        """Wait for outstanding background work, e.g. before shutdown."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
