"""Difficulty tiers and their fixed grid sizes."""

from enum import Enum

from ..utils import TIER_SIZES


class DifficultyTier(Enum):
    """Fixed, totally ordered difficulty progression with HARD as ceiling."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def width(self) -> int:
        return TIER_SIZES[self.value][0]

    @property
    def height(self) -> int:
        return TIER_SIZES[self.value][1]

    @property
    def is_final(self) -> bool:
        return self is DifficultyTier.HARD

    def next(self) -> "DifficultyTier":
        """Return the following tier. Advancing past HARD stays at HARD."""
        order = list(DifficultyTier)
        position = order.index(self)
        return order[min(position + 1, len(order) - 1)]
