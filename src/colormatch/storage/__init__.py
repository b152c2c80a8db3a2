"""Score persistence."""

from .score_store import (
    InMemoryScoreStore,
    JsonScoreStore,
    ScoreEntry,
    ScoreStore,
    rank_entries,
)

__all__ = [
    "InMemoryScoreStore",
    "JsonScoreStore",
    "ScoreEntry",
    "ScoreStore",
    "rank_entries",
]
