"""Run the leaderboard API: ``python -m santa_rush.server``."""

import argparse
import logging

from aiohttp import web

from santa_rush.config.settings import get_settings
from santa_rush.main import setup_logging
from santa_rush.server.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Santa Rush leaderboard server")
    parser.add_argument("--host", default=settings.scores.server_host)
    parser.add_argument("--port", type=int, default=settings.scores.server_port)
    parser.add_argument("--debug", action="store_true", default=settings.debug)
    args = parser.parse_args()

    setup_logging(args.debug)
    logger.info(f"Santa Rush API server starting on http://{args.host}:{args.port}/api")

    web.run_app(
        create_app(keep=settings.scores.server_keep),
        host=args.host,
        port=args.port,
        print=None,
    )


if __name__ == "__main__":
    main()
