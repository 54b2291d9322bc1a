"""ASCII maze rendering.

This module renders the current round as a character grid and formats the
status line and scoreboard shown beside it.
"""

from typing import List, Optional

from ..engine.round_lifecycle import RoundLifecycle
from ..engine.session import GameSession, SessionState
from ..models import Coordinate, Role, TileVariant
from ..storage import ScoreEntry

TILE_SYMBOLS = {
    TileVariant.FLOOR: ".",
    TileVariant.WALL: "#",
    TileVariant.ROLE_WALL_A: "a",
    TileVariant.ROLE_WALL_B: "b",
    TileVariant.GOAL: "G",
}

BOTH_ROLES_SYMBOL = "@"


class MazeRenderer:
    """Renders a round's grid with both roles drawn on top."""

    def render(self, round_: RoundLifecycle) -> str:
        """Render the maze, one character per cell.

        Legend:
        - '#' = wall (nobody passes)
        - '.' = floor
        - 'a' / 'b' = wall only role A / role B may cross
        - 'G' = goal
        - 'A' / 'B' = a role, '@' = both roles on one cell

        Args:
            round_: Started round to render

        Returns:
            Multi-line string, one line per grid row
        """
        if not round_.started:
            return ""

        grid = round_.grid
        pos_a = round_.position(Role.A)
        pos_b = round_.position(Role.B)

        lines = []
        for row, tiles in enumerate(grid.rows()):
            cells = [
                self._render_cell(tile, Coordinate(col, row), pos_a, pos_b)
                for col, tile in enumerate(tiles)
            ]
            lines.append("".join(cells))

        return "\n".join(lines)

    def _render_cell(
        self,
        tile: TileVariant,
        coord: Coordinate,
        pos_a: Coordinate,
        pos_b: Coordinate,
    ) -> str:
        if coord == pos_a and coord == pos_b:
            return BOTH_ROLES_SYMBOL
        if coord == pos_a:
            return Role.A.value
        if coord == pos_b:
            return Role.B.value
        return TILE_SYMBOLS[tile]

    def render_status(self, session: GameSession) -> str:
        """One-line HUD: state, tier, time left and goal flags."""
        parts = [session.state.value, f"tier={session.tier.value}"]

        if session.round is not None and session.round.started:
            seconds_left = session.remaining_ms() / 1000
            parts.append(f"time left {seconds_left:.1f}s")
            flags = " ".join(
                f"{role.value}:{'goal' if session.round.reached_goal(role) else '...'}"
                for role in Role
            )
            parts.append(flags)

        parts.append(f"total {session.total_elapsed_ms / 1000:.1f}s")
        return " | ".join(parts)

    def render_result(self, session: GameSession) -> Optional[str]:
        """Banner text for ROUND_COMPLETE and GAME_OVER, else None."""
        outcome = session.last_outcome()
        if session.state is SessionState.ROUND_COMPLETE and outcome:
            return (
                f"{outcome.tier.value.title()} cleared in {outcome.elapsed_ms / 1000:.1f}s. "
                f"Next: {session.tier.next().value.title()}"
            )
        if session.state is SessionState.GAME_OVER:
            if session.won:
                return f"You escaped every maze! Total time {session.total_elapsed_ms / 1000:.1f}s"
            return f"Time's up on {session.tier.value.title()}. Game over."
        return None

    def render_scoreboard(self, entries: List[ScoreEntry]) -> str:
        """Format scores as a ranked table (fastest first)."""
        if not entries:
            return "No scores yet."

        lines = [f"{'#':>2}  {'Team':<20} {'Time':>8}"]
        for rank, entry in enumerate(entries, start=1):
            lines.append(
                f"{rank:>2}  {entry.team_name:<20} {entry.total_time_ms / 1000:>7.1f}s"
            )
        return "\n".join(lines)
