"""Data models for Duo Maze."""

from .grid import Coordinate, Grid
from .outcome import RoleProgress, RoundOutcome
from .role import Direction, Role
from .tier import DifficultyTier
from .tile import TileVariant

__all__ = [
    "Coordinate",
    "Grid",
    "TileVariant",
    "Role",
    "Direction",
    "DifficultyTier",
    "RoleProgress",
    "RoundOutcome",
]
