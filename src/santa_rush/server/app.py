"""Leaderboard HTTP API.

Routes (all under ``/api``):
    GET  /health       liveness probe
    GET  /scores       every stored score
    POST /scores       submit a score
    GET  /leaderboard  top N scores (``?limit=``, default 10)

Scores are kept in memory, sorted by score descending and capped.
"""

import asyncio
import logging
from json import JSONDecodeError
from typing import Optional

from aiohttp import web

from santa_rush.scores.models import ANONYMOUS, ScoreEntry

logger = logging.getLogger(__name__)


class ScoreBoard:
    """In-memory score list shared by the request handlers."""

    def __init__(self, keep: int = 100):
        self.keep = keep
        self._scores: list[ScoreEntry] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    @property
    def total(self) -> int:
        return len(self._scores)

    async def add(self, player_name: str, score: int, followers: int) -> ScoreEntry:
        async with self._lock:
            entry = ScoreEntry(
                player_name=player_name or ANONYMOUS,
                score=score,
                followers=followers,
                id=self._next_id,
            )
            self._next_id += 1
            self._scores.append(entry)
            self._scores.sort(key=lambda e: e.score, reverse=True)
            del self._scores[self.keep:]
        logger.info(f"Score {score} by {entry.player_name} stored (id {entry.id})")
        return entry

    async def all(self) -> list[ScoreEntry]:
        async with self._lock:
            return list(self._scores)

    async def top(self, limit: int) -> list[ScoreEntry]:
        async with self._lock:
            return self._scores[:limit]


SCOREBOARD_KEY = web.AppKey("scoreboard", ScoreBoard)


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Allow the game to call the API from any origin."""
    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=200)
    else:
        response = await handler(request)

    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    return response


def _bad_request(message: str) -> web.Response:
    return web.json_response({"success": False, "error": message}, status=400)


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "message": "Santa Rush API is running"})


async def get_scores(request: web.Request) -> web.Response:
    board = request.app[SCOREBOARD_KEY]
    scores = await board.all()
    return web.json_response({
        "scores": [s.to_dict() for s in scores],
        "total": len(scores),
    })


def _is_count(value: object) -> bool:
    """JSON integers only; floats, strings and booleans are refused."""
    return isinstance(value, int) and not isinstance(value, bool)


async def submit_score(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        return _bad_request("Invalid request body")

    if not isinstance(body, dict):
        return _bad_request("Invalid request body")

    score = body.get("score", 0)
    followers = body.get("followers", 0)
    if not _is_count(score) or not _is_count(followers):
        return _bad_request("Score and followers must be integers")

    if score < 0 or followers < 0:
        return _bad_request("Invalid score or followers count")

    player_name = str(body.get("playerName") or "")
    entry = await request.app[SCOREBOARD_KEY].add(player_name, score, followers)

    return web.json_response(
        {
            "success": True,
            "message": "Score submitted successfully",
            "score": entry.to_dict(),
        },
        status=201,
    )


def _parse_limit(raw: Optional[str], default: int = 10) -> int:
    """Positive integer from the query string, otherwise the default."""
    if not raw:
        return default
    try:
        limit = int(raw)
    except ValueError:
        return default
    return limit if limit > 0 else default


async def get_leaderboard(request: web.Request) -> web.Response:
    board = request.app[SCOREBOARD_KEY]
    limit = _parse_limit(request.query.get("limit"))
    top = await board.top(limit)
    return web.json_response({
        "scores": [s.to_dict() for s in top],
        "total": board.total,
    })


def create_app(keep: int = 100) -> web.Application:
    """Build the API application."""
    app = web.Application(middlewares=[cors_middleware])
    app[SCOREBOARD_KEY] = ScoreBoard(keep=keep)

    app.router.add_get("/api/health", health)
    app.router.add_get("/api/scores", get_scores)
    app.router.add_post("/api/scores", submit_score)
    app.router.add_get("/api/leaderboard", get_leaderboard)
    # Preflight requests are answered by the middleware
    app.router.add_route("OPTIONS", "/api/{tail:.*}", health)

    return app
