"""Score persistence and leaderboard client."""

from santa_rush.scores.models import ScoreEntry, SubmitResult
from santa_rush.scores.store import ScoreStore, LocalScoreStore, create_score_store
from santa_rush.scores.remote import RemoteScoreStore

__all__ = [
    "ScoreEntry",
    "SubmitResult",
    "ScoreStore",
    "LocalScoreStore",
    "RemoteScoreStore",
    "create_score_store",
]
