"""Completion-time persistence for finished sessions.

The game session only depends on the narrow ``ScoreStore`` protocol
(save / top_scores / name_exists). ``JsonScoreStore`` keeps scores in a JSON
file; ``InMemoryScoreStore`` is used when no file is configured and in tests.
"""

import json
import logging
from pathlib import Path
from typing import List, Protocol

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class ScoreEntry(BaseModel):
    """One finished session: a team and its total completion time."""

    team_name: str = Field(min_length=1, description="Team that finished the hard round")
    total_time_ms: int = Field(ge=0, description="Sum of completed round times")


class ScoreStoreError(Exception):
    """Raised when the score file cannot be read or written."""


class ScoreStore(Protocol):
    """Persistence collaborator consumed by the game session."""

    def save(self, team_name: str, total_time_ms: int) -> None: ...

    def top_scores(self, limit: int) -> List[ScoreEntry]: ...

    def name_exists(self, team_name: str) -> bool: ...


def _ranked(entries: List[ScoreEntry], limit: int) -> List[ScoreEntry]:
    """Fastest first; ties keep insertion order."""
    if limit <= 0:
        return []
    return sorted(entries, key=lambda entry: entry.total_time_ms)[:limit]


class InMemoryScoreStore:
    """Score store that lives only as long as the process."""

    def __init__(self):
        self.entries: List[ScoreEntry] = []

    def save(self, team_name: str, total_time_ms: int) -> None:
        self.entries.append(ScoreEntry(team_name=team_name, total_time_ms=total_time_ms))

    def top_scores(self, limit: int) -> List[ScoreEntry]:
        return _ranked(self.entries, limit)

    def name_exists(self, team_name: str) -> bool:
        return any(entry.team_name == team_name for entry in self.entries)


class JsonScoreStore:
    """Score store backed by a JSON list on disk.

    A missing file means no scores yet. Every call re-reads the file.
    """

    def __init__(self, path: str | Path):
        """Initialize store.

        Args:
            path: Location of the JSON score file (created on first save)
        """
        self.path = Path(path)

    def save(self, team_name: str, total_time_ms: int) -> None:
        """Append a score and rewrite the file.

        Args:
            team_name: Team that finished
            total_time_ms: Accumulated completion time

        Raises:
            ScoreStoreError: If the file cannot be read or written
            pydantic.ValidationError: If the entry is invalid
        """
        entry = ScoreEntry(team_name=team_name, total_time_ms=total_time_ms)
        entries = self._load()
        entries.append(entry)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([e.model_dump() for e in entries], f, indent=2)
        except OSError as e:
            raise ScoreStoreError(f"Could not write scores to {self.path}: {e}") from e

        logger.info(f"Saved score for team '{team_name}': {total_time_ms} ms")

    def top_scores(self, limit: int) -> List[ScoreEntry]:
        """Return up to ``limit`` scores, fastest first."""
        return _ranked(self._load(), limit)

    def name_exists(self, team_name: str) -> bool:
        return any(entry.team_name == team_name for entry in self._load())

    def _load(self) -> List[ScoreEntry]:
        """Read and validate all stored entries.

        Raises:
            ScoreStoreError: If the file is unreadable or malformed
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ScoreStoreError(f"Could not read scores from {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise ScoreStoreError(f"Score file {self.path} must contain a JSON list")

        try:
            return [ScoreEntry.model_validate(item) for item in raw]
        except ValidationError as e:
            raise ScoreStoreError(f"Malformed score entry in {self.path}: {e}") from e
