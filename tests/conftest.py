"""Shared fixtures: a controllable clock and a BFS path finder."""

from collections import deque
from typing import List, Optional

import pytest

from duomaze.engine.passability import can_occupy
from duomaze.models import Coordinate, Direction, Grid, Role


class FakeClock:
    """Callable clock returning seconds; advanced manually by tests."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: int) -> None:
        self.now += ms / 1000


def find_path(grid: Grid, start: Coordinate, goal: Coordinate, role: Role) -> Optional[List[Direction]]:
    """Shortest list of directions from start to goal over cells role may occupy."""
    came_from = {start: None}
    queue = deque([start])

    while queue:
        cell = queue.popleft()
        if cell == goal:
            break
        for direction in Direction:
            nxt = cell.offset(direction.dcol, direction.drow)
            if nxt in came_from or not grid.in_bounds(nxt):
                continue
            if not can_occupy(grid.tile_at(nxt), role):
                continue
            came_from[nxt] = (cell, direction)
            queue.append(nxt)

    if goal not in came_from:
        return None

    path = []
    cell = goal
    while came_from[cell] is not None:
        cell, direction = came_from[cell]
        path.append(direction)
    path.reverse()
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def path_finder():
    return find_path
