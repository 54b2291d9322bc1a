"""Tile variants that make up a maze grid."""

from enum import Enum


class TileVariant(Enum):
    """Closed set of tile kinds. Each grid cell holds exactly one."""

    FLOOR = "floor"
    WALL = "wall"
    ROLE_WALL_A = "role_wall_a"  # Only role A may enter
    ROLE_WALL_B = "role_wall_b"  # Only role B may enter
    GOAL = "goal"
