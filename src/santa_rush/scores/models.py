"""Score records shared by the stores, the client and the server."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

ANONYMOUS = "Anonymous"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ScoreEntry:
    """One leaderboard row.

    Serialized with camelCase keys (``playerName``) so local files, the client
    and the server all speak the same JSON.
    """

    player_name: str
    score: int
    followers: int = 0
    timestamp: str = field(default_factory=utc_now_iso)
    id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "playerName": self.player_name,
            "score": self.score,
            "followers": self.followers,
            "timestamp": self.timestamp,
        }
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoreEntry":
        """Build from a JSON object. Raises KeyError/TypeError/ValueError on bad input."""
        return cls(
            player_name=str(data.get("playerName") or ANONYMOUS),
            score=int(data["score"]),
            followers=int(data.get("followers") or 0),
            timestamp=str(data.get("timestamp") or utc_now_iso()),
            id=int(data["id"]) if data.get("id") is not None else None,
        )


@dataclass
class SubmitResult:
    """Outcome of a score submission."""

    success: bool
    entry: Optional[ScoreEntry] = None
    remote: bool = False
    message: str = ""
    error: Optional[str] = None
