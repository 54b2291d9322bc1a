"""Maze generation with depth-first carving and role-restricted walls."""

import logging
from dataclasses import dataclass
from typing import List

from ..models import Coordinate, Grid, TileVariant
from ..utils import (
    ROLE_WALL_ATTEMPT_FACTOR,
    ROLE_WALL_DENSITY,
    ROLE_WALL_MIN_DISTANCE,
    START_COL,
    START_ROW,
    GameRNG,
    manhattan_distance,
)

logger = logging.getLogger(__name__)

# Carving moves two cells at a time so a one-cell wall stays between corridors
CARVE_STEPS = [(0, -2), (0, 2), (-2, 0), (2, 0)]


@dataclass
class GeneratedMaze:
    """A freshly generated grid with its spawn and goal cells.

    Attributes:
        grid: Fully populated grid
        start: Shared spawn cell of both roles
        goal: The single goal cell
        role_walls_placed: How many role-restricted walls were placed
    """

    grid: Grid
    start: Coordinate
    goal: Coordinate
    role_walls_placed: int


def generate_maze(width: int, height: int, rng: GameRNG) -> GeneratedMaze:
    """Generate a solvable maze for two cooperating roles.

    Algorithm:
    1. Fill the grid with walls
    2. Carve a perfect maze from the start cell with randomized depth-first
       search on an explicit stack, stepping two cells at a time
    3. Open the goal cell and every wall in its 3x3 neighbourhood (clipped to
       the interior) so the goal is always reachable, then mark it GOAL
    4. Convert a share of the remaining walls into role-restricted walls,
       keeping them away from the start and goal

    Odd dimensions give a full wall lattice around every carved cell; even
    dimensions still work because step 3 connects the goal to the carved
    region.

    Args:
        width: Grid width in cells (>= 3)
        height: Grid height in cells (>= 3)
        rng: Seeded random number generator

    Returns:
        GeneratedMaze with grid, start, goal and role wall count
    """
    grid = Grid(width=width, height=height)
    start = Coordinate(START_COL, START_ROW)
    goal = Coordinate(width - 2, height - 2)

    _carve_passages(grid, start, rng)
    _open_goal(grid, goal)
    placed = _place_role_walls(grid, start, goal, rng)

    logger.debug(
        f"Generated {width}x{height} maze: goal=({goal.col}, {goal.row}), "
        f"floor={grid.count(TileVariant.FLOOR)}, role_walls={placed}"
    )

    return GeneratedMaze(grid=grid, start=start, goal=goal, role_walls_placed=placed)


def _carve_passages(grid: Grid, start: Coordinate, rng: GameRNG) -> None:
    """Carve corridors from start using depth-first search with backtracking.

    Each push carves a previously uncarved cell, so the loop runs at most
    O(width * height) times.

    Args:
        grid: Grid to carve (modified in place)
        start: Cell the carving starts from
        rng: Random number generator
    """
    grid.set_tile(start, TileVariant.FLOOR)
    stack: List[Coordinate] = [start]

    while stack:
        current = stack[-1]
        candidates = _uncarved_neighbours(grid, current)

        if not candidates:
            stack.pop()
            continue

        target = rng.choice(candidates)
        midpoint = Coordinate(
            (current.col + target.col) // 2,
            (current.row + target.row) // 2,
        )
        grid.set_tile(midpoint, TileVariant.FLOOR)
        grid.set_tile(target, TileVariant.FLOOR)
        stack.append(target)


def _uncarved_neighbours(grid: Grid, cell: Coordinate) -> List[Coordinate]:
    """Cells two steps away that are inside the border and still walls."""
    neighbours = []
    for dcol, drow in CARVE_STEPS:
        target = cell.offset(dcol, drow)
        if grid.is_interior(target) and grid.tile_at(target) is TileVariant.WALL:
            neighbours.append(target)
    return neighbours


def _open_goal(grid: Grid, goal: Coordinate) -> None:
    """Clear walls around the goal and mark it.

    Without this pass the carve can leave the goal boxed in (always the case
    on even-sized grids, where the goal sits off the carving lattice).

    Args:
        grid: Grid to modify in place
        goal: Goal coordinate
    """
    grid.set_tile(goal, TileVariant.FLOOR)

    for drow in (-1, 0, 1):
        for dcol in (-1, 0, 1):
            cell = goal.offset(dcol, drow)
            if grid.is_interior(cell) and grid.tile_at(cell) is TileVariant.WALL:
                grid.set_tile(cell, TileVariant.FLOOR)

    grid.set_tile(goal, TileVariant.GOAL)


def _place_role_walls(
    grid: Grid,
    start: Coordinate,
    goal: Coordinate,
    rng: GameRNG,
) -> int:
    """Convert random interior walls into role-restricted walls.

    Only plain walls far enough from both start and goal are eligible. Floor
    is never touched, so every carved corridor stays open to both roles.
    Sampling is capped; falling short of the target is accepted.

    Args:
        grid: Grid to modify in place
        start: Spawn cell
        goal: Goal cell
        rng: Random number generator

    Returns:
        Number of role-restricted walls placed
    """
    target_count = int(grid.width * grid.height * ROLE_WALL_DENSITY)
    max_attempts = target_count * ROLE_WALL_ATTEMPT_FACTOR

    placed = 0
    attempts = 0

    while placed < target_count and attempts < max_attempts:
        attempts += 1
        cell = Coordinate(
            rng.randint(1, grid.width - 2),
            rng.randint(1, grid.height - 2),
        )

        if grid.tile_at(cell) is not TileVariant.WALL:
            continue
        if manhattan_distance(cell.col, cell.row, start.col, start.row) <= ROLE_WALL_MIN_DISTANCE:
            continue
        if manhattan_distance(cell.col, cell.row, goal.col, goal.row) <= ROLE_WALL_MIN_DISTANCE:
            continue

        variant = TileVariant.ROLE_WALL_A if rng.coin_flip() else TileVariant.ROLE_WALL_B
        grid.set_tile(cell, variant)
        placed += 1

    if placed < target_count:
        logger.debug(
            f"Placed {placed}/{target_count} role walls after {attempts} attempts"
        )

    return placed
