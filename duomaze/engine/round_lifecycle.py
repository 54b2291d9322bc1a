"""One round: a generated maze, both roles' progress, and the round timer.

This module handles:
1. Generating the maze for a tier at round start
2. Validating and applying role moves against tile passability
3. Tracking which roles have reached the goal
4. Timing the round and producing its outcome record
"""

import logging
from typing import Optional, Tuple

from ..models import (
    Coordinate,
    DifficultyTier,
    Direction,
    Grid,
    Role,
    RoleProgress,
    RoundOutcome,
)
from ..utils import ROUND_TIME_LIMIT_MS, Clock, GameRNG, RoundTimer
from .maze_generator import generate_maze
from .passability import can_occupy

logger = logging.getLogger(__name__)


class RoundLifecycle:
    """Owns the state of a single round.

    Movement arrives as absolute target coordinates; translating a direction
    into a target is the caller's job (see ``target_for``). Before the first
    ``start`` no roles are tracked and the round is never complete.
    """

    def __init__(
        self,
        rng: GameRNG,
        clock: Optional[Clock] = None,
        time_limit_ms: int = ROUND_TIME_LIMIT_MS,
    ):
        """Initialize an idle round.

        Args:
            rng: Seeded RNG shared across rounds for replayable sequences
            clock: Monotonic seconds source (defaults to time.monotonic)
            time_limit_ms: Per-round time limit
        """
        self.rng = rng
        self.time_limit_ms = time_limit_ms
        self.timer = RoundTimer(clock)
        self.tier: Optional[DifficultyTier] = None
        self.grid: Optional[Grid] = None
        self.start_coord: Optional[Coordinate] = None
        self.goal: Optional[Coordinate] = None
        # One slot per role, indexed by Role.index; empty until start()
        self._progress: Tuple[RoleProgress, ...] = ()

    def start(self, tier: DifficultyTier) -> None:
        """Generate a maze for ``tier`` and reset both roles to the start.

        Args:
            tier: Difficulty tier that decides the grid size
        """
        maze = generate_maze(tier.width, tier.height, self.rng)
        self.tier = tier
        self.grid = maze.grid
        self.start_coord = maze.start
        self.goal = maze.goal
        # Both roles spawn on the same cell
        self._progress = (
            RoleProgress(position=maze.start),
            RoleProgress(position=maze.start),
        )
        self.timer.start()

        logger.debug(
            f"Round started: tier={tier.value}, size={tier.width}x{tier.height}, "
            f"role_walls={maze.role_walls_placed}"
        )

    @property
    def started(self) -> bool:
        return self.grid is not None

    def attempt_move(self, role: Role, target: Coordinate) -> bool:
        """Move ``role`` onto ``target`` if the tile allows it.

        Rejected moves leave all state untouched.

        Args:
            role: Role being moved
            target: Absolute destination cell

        Returns:
            True if the move was applied, False if it was rejected
        """
        if not self.started:
            return False
        if not self.grid.in_bounds(target):
            return False
        if not can_occupy(self.grid.tile_at(target), role):
            return False

        progress = self._progress[role.index]
        progress.position = target
        if target == self.goal:
            progress.reached_goal = True
        return True

    def target_for(self, role: Role, direction: Direction) -> Coordinate:
        """Cell one step from ``role``'s position along ``direction``."""
        return self.position(role).offset(direction.dcol, direction.drow)

    def is_complete(self) -> bool:
        """True when at least one role is tracked and all have reached the goal."""
        if not self._progress:
            return False
        return all(progress.reached_goal for progress in self._progress)

    def stop(self) -> None:
        """Freeze the round timer."""
        self.timer.stop()

    def elapsed_ms(self) -> int:
        return self.timer.elapsed_ms()

    def remaining_ms(self) -> int:
        return max(0, self.time_limit_ms - self.elapsed_ms())

    def is_expired(self) -> bool:
        return self.started and self.elapsed_ms() >= self.time_limit_ms

    def position(self, role: Role) -> Coordinate:
        if not self._progress:
            raise ValueError("Round has not been started")
        return self._progress[role.index].position

    def reached_goal(self, role: Role) -> bool:
        if not self._progress:
            return False
        return self._progress[role.index].reached_goal

    def outcome(self, tier: Optional[DifficultyTier] = None) -> RoundOutcome:
        """Snapshot the round as an immutable outcome record.

        Args:
            tier: Tier to record (defaults to the tier this round was started with)

        Returns:
            RoundOutcome with elapsed time and completion flag
        """
        recorded_tier = tier or self.tier
        if recorded_tier is None:
            raise ValueError("Round has not been started")
        return RoundOutcome(
            tier=recorded_tier,
            elapsed_ms=self.elapsed_ms(),
            completed=self.is_complete(),
        )
