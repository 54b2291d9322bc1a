"""Per-role progress and finished round records."""

from dataclasses import dataclass

from .grid import Coordinate
from .tier import DifficultyTier


@dataclass
class RoleProgress:
    """Where a role stands in the current round."""

    position: Coordinate
    reached_goal: bool = False


@dataclass(frozen=True)
class RoundOutcome:
    """Immutable record of a finished round, appended to session history."""

    tier: DifficultyTier
    elapsed_ms: int
    completed: bool

    def __post_init__(self):
        """Validate outcome data after initialization."""
        if self.elapsed_ms < 0:
            raise ValueError(f"Invalid elapsed_ms: {self.elapsed_ms} (must be >= 0)")
