"""
Game window using pygame.

Maps keyboard/mouse/touch to the hold-to-fly button, drives the game loop
once per frame and blits the renderer's buffer with a text HUD on top.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from santa_rush.core.events import Event, EventBus, EventType
from santa_rush.core.state import State
from santa_rush.game.loop import GameLoop
from santa_rush.graphics.renderer import SessionRenderer
from santa_rush.simulator.input import HoldButton

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 1280
    height: int = 720
    title: str = "Santa Rush"
    fullscreen: bool = False
    fps: int = 60

    # Colors
    text_color: tuple[int, int, int] = (255, 255, 255)
    accent_color: tuple[int, int, int] = (255, 215, 0)
    danger_color: tuple[int, int, int] = (255, 0, 0)


class GameWindow:
    """
    Desktop window for Santa Rush.

    Keyboard Mapping:
        SPACE / ENTER: Hold to fly
        Mouse button:  Hold to fly
        R:             Restart round
        S:             Screenshot
        ESC / Q:       Exit
    """

    BOOST_KEYS = (pygame.K_SPACE, pygame.K_RETURN)

    def __init__(
        self,
        game_loop: GameLoop,
        renderer: SessionRenderer,
        button: HoldButton,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.game_loop = game_loop
        self.renderer = renderer
        self.button = button
        self.event_bus = event_bus or game_loop.event_bus

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False

        self.button.on_press(lambda: self.event_bus.emit(Event(EventType.BOOST_PRESS, source="window")))
        self.button.on_release(lambda: self.event_bus.emit(Event(EventType.BOOST_RELEASE, source="window")))

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 40)
        self._big_font = pygame.font.SysFont(None, 96)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                if event.key in self.BOOST_KEYS:
                    self.button.release(pygame.key.name(event.key))

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.button.press("mouse")
            elif event.type == pygame.MOUSEBUTTONUP:
                self.button.release("mouse")

            elif event.type == pygame.FINGERDOWN:
                self.button.press(f"finger{event.finger_id}")
            elif event.type == pygame.FINGERUP:
                self.button.release(f"finger{event.finger_id}")

            elif event.type == pygame.WINDOWFOCUSLOST:
                self.button.release_all()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in self.BOOST_KEYS:
            self.button.press(pygame.key.name(key))
        elif key == pygame.K_r:
            self.game_loop.start_round()
        elif key == pygame.K_s:
            self._capture_screenshot()

    def _render(self) -> None:
        """Blit the frame buffer and draw the HUD."""
        if not self._screen:
            return

        surface = pygame.surfarray.make_surface(self.renderer.buffer.swapaxes(0, 1))
        if surface.get_size() != self._screen.get_size():
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud()
        pygame.display.flip()

    def _render_hud(self) -> None:
        if not self._font or not self._big_font or not self._screen:
            return

        session = self.game_loop.session
        width, height = self._screen.get_size()

        score = self._font.render(f"Score: {session.score}", True, self.config.text_color)
        chain = self._font.render(f"Reindeer: {session.follower_count}", True, self.config.text_color)
        best = self._font.render(f"High: {self.game_loop.high_score}", True, self.config.text_color)
        self._screen.blit(score, (20, 20))
        self._screen.blit(chain, (20, 60))
        self._screen.blit(best, (width - best.get_width() - 20, 20))

        if self.game_loop.state is State.GAME_OVER:
            lines = [
                (self._big_font, "GAME OVER", self.config.danger_color, -50),
                (self._font, f"Score: {session.score}", self.config.text_color, 20),
                (self._font, f"Reindeer: {session.follower_count}", self.config.text_color, 60),
                (self._font, "Restarting...", self.config.accent_color, 110),
            ]
            for font, text, color, dy in lines:
                rendered = font.render(text, True, color)
                self._screen.blit(rendered, rendered.get_rect(center=(width // 2, height // 2 + dy)))

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self.game_loop.frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main loop: one update and one draw per frame."""
        self._init_pygame()
        self._running = True
        self.game_loop.start()

        logger.info("Game started")

        while self._running:
            self._handle_events()

            self.game_loop.tick()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Let background score requests progress
            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        await self.game_loop.drain()
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window closed")

    def stop(self) -> None:
        """Stop the main loop after the current frame."""
        self._running = False
