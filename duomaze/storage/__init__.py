"""Score persistence for Duo Maze."""

from .score_store import (
    InMemoryScoreStore,
    JsonScoreStore,
    ScoreEntry,
    ScoreStore,
    ScoreStoreError,
)

__all__ = [
    "InMemoryScoreStore",
    "JsonScoreStore",
    "ScoreEntry",
    "ScoreStore",
    "ScoreStoreError",
]
