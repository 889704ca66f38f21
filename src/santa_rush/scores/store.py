"""Score persistence: the store interface and the local JSON store."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from santa_rush.config.settings import Settings, get_settings
from santa_rush.scores.models import ANONYMOUS, ScoreEntry, SubmitResult

logger = logging.getLogger(__name__)


class ScoreStore(ABC):
    """Where high scores and leaderboard entries live.

    Implementations must never raise on storage or network trouble; the game
    loop treats every call as best effort.
    """

    @abstractmethod
    def get_high_score(self) -> int:
        """Best score recorded on this machine."""
        ...

    @abstractmethod
    def save_high_score(self, score: int) -> bool:
        """Record ``score`` if it beats the current best. Returns True on a new record."""
        ...

    @abstractmethod
    async def submit_score(self, player_name: str, score: int, followers: int) -> SubmitResult:
        ...

    @abstractmethod
    async def get_leaderboard(self, limit: int = 10) -> list[ScoreEntry]:
        """Top entries, highest score first."""
        ...

    async def check_backend(self) -> bool:
        """Whether a remote backend is reachable. Local stores have none."""
        return False

    async def close(self) -> None:
        pass


class LocalScoreStore(ScoreStore):
    """JSON file store, the fallback whenever the server is unreachable.

    File layout::

        {"high_score": 42, "scores": [{"playerName": ..., "score": ...}, ...]}
    """

    def __init__(self, path: Path, keep: int = 50):
        self.path = Path(path)
        self.keep = keep

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"high_score": 0, "scores": []}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable score file {self.path}: {e}")
            return {"high_score": 0, "scores": []}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed score file {self.path}")
            return {"high_score": 0, "scores": []}
        data.setdefault("high_score", 0)
        data.setdefault("scores", [])
        return data

    def _save(self, data: dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write score file {self.path}: {e}")
            return False
        return True

    def _entries(self, data: dict[str, Any]) -> list[ScoreEntry]:
        entries = []
        for raw in data.get("scores", []):
            try:
                entries.append(ScoreEntry.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.debug(f"Skipping bad local score row: {raw!r}")
        return entries

    def get_high_score(self) -> int:
        try:
            return int(self._load().get("high_score", 0))
        except (TypeError, ValueError):
            return 0

    def save_high_score(self, score: int) -> bool:
        data = self._load()
        try:
            current = int(data["high_score"])
        except (TypeError, ValueError):
            current = 0
        if score > current:
            data["high_score"] = score
            self._save(data)
            logger.info(f"New local high score: {score}")
            return True
        return False

    def add_entry(self, entry: ScoreEntry) -> ScoreEntry:
        """Insert, sort descending and keep the top ``keep`` rows."""
        data = self._load()
        entries = self._entries(data)
        entries.append(entry)
        entries.sort(key=lambda e: e.score, reverse=True)
        data["scores"] = [e.to_dict() for e in entries[:self.keep]]
        self._save(data)
        return entry

    def top(self, limit: int = 10) -> list[ScoreEntry]:
        return self._entries(self._load())[:limit]

    async def submit_score(self, player_name: str, score: int, followers: int) -> SubmitResult:
        entry = self.add_entry(ScoreEntry(
            player_name=player_name or ANONYMOUS,
            score=score,
            followers=followers,
        ))
        return SubmitResult(success=True, entry=entry, remote=False, message="Saved locally")

    async def get_leaderboard(self, limit: int = 10) -> list[ScoreEntry]:
        return self.top(limit)


def create_score_store(settings: Optional[Settings] = None) -> ScoreStore:
    """Build the default store: remote with a local fallback."""
    from santa_rush.scores.remote import RemoteScoreStore

    score_settings = (settings or get_settings()).scores
    local = LocalScoreStore(score_settings.local_path, keep=score_settings.local_keep)
    return RemoteScoreStore(
        api_url=score_settings.api_url,
        fallback=local,
        timeout=score_settings.request_timeout,
    )
