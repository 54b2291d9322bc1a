"""Which roles may stand on which tiles."""

from ..models.role import Role
from ..models.tile import TileVariant


def can_occupy(tile: TileVariant, role: Role) -> bool:
    """Return True if ``role`` may occupy a cell holding ``tile``.

    Floor and goal are open to both roles, plain walls to neither. Each
    role-restricted wall admits only its own role.

    Args:
        tile: Tile variant of the target cell
        role: Role attempting to enter

    Returns:
        True if the move onto this tile is allowed
    """
    if tile is TileVariant.FLOOR or tile is TileVariant.GOAL:
        return True
    if tile is TileVariant.ROLE_WALL_A:
        return role is Role.A
    if tile is TileVariant.ROLE_WALL_B:
        return role is Role.B
    if tile is TileVariant.WALL:
        return False
    raise ValueError(f"Unknown tile variant: {tile!r}")
