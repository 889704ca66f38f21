"""Leaderboard client for the Santa Rush score server.

Talks to the aiohttp server in ``santa_rush.server`` and falls back to a
LocalScoreStore whenever the server is unreachable or answers with garbage.
High scores are always kept locally.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from santa_rush.scores.models import ANONYMOUS, ScoreEntry, SubmitResult, utc_now_iso
from santa_rush.scores.store import LocalScoreStore, ScoreStore

logger = logging.getLogger(__name__)


class RemoteScoreStore(ScoreStore):
    """Score store backed by the HTTP API with a local fallback."""

    def __init__(
        self,
        api_url: str,
        fallback: LocalScoreStore,
        timeout: float = 5.0,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL of the API, e.g. ``http://localhost:8080/api``
            fallback: Local store used when the server cannot be reached
            timeout: Total timeout per request in seconds
        """
        self._api_url = api_url.rstrip("/")
        self._fallback = fallback
        self._timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        self.backend_available = False

    @property
    def fallback(self) -> LocalScoreStore:
        return self._fallback

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def check_backend(self) -> bool:
        """Probe ``/health`` and remember whether the server answered."""
        try:
            session = await self._get_session()
            async with session.get(f"{self._api_url}/health") as response:
                self.backend_available = response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.info(f"Backend not available, using local storage ({e.__class__.__name__})")
            self.backend_available = False
        return self.backend_available

    def get_high_score(self) -> int:
        return self._fallback.get_high_score()

    def save_high_score(self, score: int) -> bool:
        return self._fallback.save_high_score(score)

    async def submit_score(self, player_name: str, score: int, followers: int) -> SubmitResult:
        """Submit to the server, or locally when the backend is down."""
        if not self.backend_available:
            return await self._fallback.submit_score(player_name, score, followers)

        payload = {
            "playerName": player_name or ANONYMOUS,
            "score": score,
            "followers": followers,
            "timestamp": utc_now_iso(),
        }

        try:
            session = await self._get_session()
            async with session.post(f"{self._api_url}/scores", json=payload) as response:
                data: dict[str, Any] = await response.json()

                if response.status == 201 and data.get("success"):
                    entry = ScoreEntry.from_dict(data["score"])
                    logger.info(f"Score {score} submitted to server (id {entry.id})")
                    return SubmitResult(
                        success=True,
                        entry=entry,
                        remote=True,
                        message=data.get("message", ""),
                    )

                error = data.get("error", f"HTTP {response.status}")
                logger.error(f"Server rejected score: {error}")

        except asyncio.TimeoutError:
            logger.error("Timeout submitting score")
        except aiohttp.ClientError as e:
            logger.error(f"Failed to submit score: {e}")
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Bad response submitting score: {e}")

        return await self._fallback.submit_score(player_name, score, followers)

    async def get_leaderboard(self, limit: int = 10) -> list[ScoreEntry]:
        if not self.backend_available:
            return await self._fallback.get_leaderboard(limit)

        try:
            session = await self._get_session()
            async with session.get(
                f"{self._api_url}/leaderboard", params={"limit": str(limit)}
            ) as response:
                response.raise_for_status()
                data = await response.json()
                return [ScoreEntry.from_dict(row) for row in data.get("scores") or []]

        except asyncio.TimeoutError:
            logger.error("Timeout fetching leaderboard")
        except aiohttp.ClientError as e:
            logger.error(f"Failed to fetch leaderboard: {e}")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Bad leaderboard payload: {e}")

        return await self._fallback.get_leaderboard(limit)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
