"""
Main entry point for Santa Rush.

Builds the game from settings and runs it in a pygame window.
"""

import argparse
import asyncio
import logging
import sys

from santa_rush.config.settings import Settings, get_settings
from santa_rush.core.errors import SantaRushError


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    # Per-entity spawn logs are noisy even in debug runs
    logging.getLogger("santa_rush.game.obstacles").setLevel(logging.INFO)


async def run_game(settings: Settings) -> None:
    """Run the game until the window closes."""
    from santa_rush.core.events import EventBus
    from santa_rush.core.state import StateMachine
    from santa_rush.game.loop import GameLoop
    from santa_rush.graphics.renderer import SessionRenderer
    from santa_rush.scores.store import create_score_store
    from santa_rush.simulator.input import HoldButton
    from santa_rush.simulator.window import GameWindow, WindowConfig

    event_bus = EventBus()
    button = HoldButton()
    renderer = SessionRenderer(settings.display.canvas_width, settings.display.canvas_height)
    score_store = create_score_store(settings)

    game_loop = GameLoop(
        settings=settings,
        input_source=button,
        score_store=score_store,
        renderer=renderer,
        event_bus=event_bus,
        state_machine=StateMachine(),
    )

    width, height = settings.window_size
    window = GameWindow(
        game_loop=game_loop,
        renderer=renderer,
        button=button,
        config=WindowConfig(
            width=width,
            height=height,
            fullscreen=settings.display.fullscreen,
            fps=settings.display.fps,
        ),
        event_bus=event_bus,
    )

    try:
        await window.run()
    finally:
        await score_store.close()


def main() -> None:
    """Console entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Santa Rush - hold to fly")
    parser.add_argument("--debug", action="store_true", default=settings.debug)
    parser.add_argument("--name", default=settings.player_name, help="Name sent with scores")
    args = parser.parse_args()

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    settings = settings.model_copy(update={"player_name": args.name})

    logger.info("Santa Rush starting")
    logger.info("Controls: hold SPACE/ENTER or the mouse to fly, R restart, Q quit")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except SantaRushError as e:
        logger.error(f"Cannot start: {e}")
        sys.exit(2)
    except Exception as e:
        logger.exception(f"Game error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
