"""Game session state machine across the three difficulty tiers."""

import logging
from enum import Enum
from typing import List, Optional

from ..models import DifficultyTier, Direction, Role, RoundOutcome
from ..storage import InMemoryScoreStore, ScoreEntry, ScoreStore
from ..utils import (
    RNG_SEED_DEFAULT,
    ROUND_TIME_LIMIT_MS,
    SCOREBOARD_LIMIT,
    Clock,
    GameRNG,
)
from .round_lifecycle import RoundLifecycle

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """What the session is doing, and therefore what the UI may do."""

    MENU = "MENU"
    PLAYING = "PLAYING"
    ROUND_COMPLETE = "ROUND_COMPLETE"
    GAME_OVER = "GAME_OVER"
    SCOREBOARD = "SCOREBOARD"


class GameSession:
    """Runs one team through Easy, Medium and Hard rounds.

    The session is created by the caller and passed wherever it is needed.
    Transitions happen only through the methods below, each a synchronous
    call. Input that does not fit the current state is ignored rather than
    raised.

    Transitions:
        MENU --start_game--> PLAYING
        PLAYING --move completes round--> ROUND_COMPLETE (or GAME_OVER on Hard)
        PLAYING --tick past time limit--> GAME_OVER
        ROUND_COMPLETE --start_next_round--> PLAYING
        MENU --request_scoreboard--> SCOREBOARD --back--> MENU
        any --stop_game--> MENU
    """

    def __init__(
        self,
        score_store: Optional[ScoreStore] = None,
        seed: int = RNG_SEED_DEFAULT,
        clock: Optional[Clock] = None,
        time_limit_ms: int = ROUND_TIME_LIMIT_MS,
    ):
        """Initialize a session in the menu.

        Args:
            score_store: Persistence collaborator (in-memory if omitted)
            seed: RNG seed; the same seed replays the same mazes
            clock: Monotonic seconds source for round timers
            time_limit_ms: Per-round time limit
        """
        self.score_store = score_store if score_store is not None else InMemoryScoreStore()
        self.seed = seed
        self.clock = clock
        self.time_limit_ms = time_limit_ms
        self.rng = GameRNG(seed)

        self.state = SessionState.MENU
        self.tier = DifficultyTier.EASY
        self.team_name: Optional[str] = None
        self.round: Optional[RoundLifecycle] = None
        self.history: List[RoundOutcome] = []
        self.total_elapsed_ms = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_game(self, team_name: str) -> None:
        """Start a fresh game on the Easy tier.

        Args:
            team_name: Team whose total time is saved on a win
        """
        if self.round is not None:
            self.round.stop()

        self.team_name = team_name
        self.tier = DifficultyTier.EASY
        self.history = []
        self.total_elapsed_ms = 0
        self._start_round()

        logger.info(f"Game started for team '{team_name}' (seed={self.seed})")

    def move(self, role: Role, direction: Direction) -> bool:
        """Move a role one cell, completing the round if both reach the goal.

        Args:
            role: Role to move
            direction: Direction of the single-cell step

        The round clock is checked first, so a move made after the time
        limit ends the game instead of completing the round.

        Returns:
            True if the move was applied, False if ignored, blocked or late
        """
        if self.state is not SessionState.PLAYING:
            return False
        # An expired round must lose even if the front end has not polled yet
        self.tick()
        if self.state is not SessionState.PLAYING:
            return False

        target = self.round.target_for(role, direction)
        if not self.round.attempt_move(role, target):
            return False

        if self.round.is_complete():
            self._complete_round()
        return True

    def tick(self) -> None:
        """Check the round clock. Safe to call repeatedly.

        Only a running, unfinished round past its time limit changes state:
        it ends the game as a loss.
        """
        if self.state is not SessionState.PLAYING:
            return
        if self.round.is_complete() or not self.round.is_expired():
            return

        self.round.stop()
        outcome = self.round.outcome(self.tier)
        self.history.append(outcome)
        self.state = SessionState.GAME_OVER

        logger.info(
            f"Round timed out on {self.tier.value} after {outcome.elapsed_ms} ms; "
            f"team '{self.team_name}' loses"
        )

    def start_next_round(self) -> bool:
        """Advance one tier (Hard is the ceiling) and start its round.

        Returns:
            True if a round was started, False if not in ROUND_COMPLETE
        """
        if self.state is not SessionState.ROUND_COMPLETE:
            return False

        self.tier = self.tier.next()
        self._start_round()
        return True

    def stop_game(self) -> None:
        """Abandon the game from any state and return to the menu."""
        if self.round is not None:
            self.round.stop()
            logger.info(f"Game stopped on {self.tier.value}; round discarded")
        self.round = None
        self.state = SessionState.MENU

    def request_scoreboard(self, limit: int = SCOREBOARD_LIMIT) -> List[ScoreEntry]:
        """Open the scoreboard from the menu.

        Store failures are logged and show as an empty board.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Fastest scores first (empty if not in the menu or on failure)
        """
        if self.state is not SessionState.MENU:
            return []

        self.state = SessionState.SCOREBOARD
        try:
            return self.score_store.top_scores(limit)
        except Exception as e:
            logger.error(f"Failed to load scoreboard: {e}", exc_info=True)
            return []

    def back(self) -> None:
        """Leave the scoreboard."""
        if self.state is SessionState.SCOREBOARD:
            self.state = SessionState.MENU

    def team_name_taken(self, team_name: str) -> bool:
        """Ask the score store whether a team name is already recorded.

        A failing store is logged and treated as "not taken".
        """
        try:
            return self.score_store.name_exists(team_name)
        except Exception as e:
            logger.error(f"Failed to check team name '{team_name}': {e}", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def won(self) -> bool:
        """True once the Hard round has been completed."""
        return (
            self.state is SessionState.GAME_OVER
            and bool(self.history)
            and self.history[-1].completed
            and self.history[-1].tier is DifficultyTier.HARD
        )

    def last_outcome(self) -> Optional[RoundOutcome]:
        return self.history[-1] if self.history else None

    def elapsed_ms(self) -> int:
        return self.round.elapsed_ms() if self.round else 0

    def remaining_ms(self) -> int:
        return self.round.remaining_ms() if self.round else self.time_limit_ms

    def get_state(self) -> dict:
        """Serialize session state for renderers.

        Returns:
            Dictionary with session state, tier, timing, roles and grid size
        """
        state = {
            "state": self.state.value,
            "tier": self.tier.value,
            "team": self.team_name,
            "elapsedMs": self.elapsed_ms(),
            "remainingMs": self.remaining_ms(),
            "totalElapsedMs": self.total_elapsed_ms,
            "won": self.won,
            "history": [
                {"tier": o.tier.value, "elapsedMs": o.elapsed_ms, "completed": o.completed}
                for o in self.history
            ],
            "roles": {},
            "grid": None,
        }

        if self.round is not None and self.round.started:
            state["grid"] = {"width": self.round.grid.width, "height": self.round.grid.height}
            state["roles"] = {
                role.value: {
                    "col": self.round.position(role).col,
                    "row": self.round.position(role).row,
                    "reachedGoal": self.round.reached_goal(role),
                }
                for role in Role
            }

        return state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_round(self) -> None:
        self.round = RoundLifecycle(self.rng, clock=self.clock, time_limit_ms=self.time_limit_ms)
        self.round.start(self.tier)
        self.state = SessionState.PLAYING

        logger.info(f"Round started on {self.tier.value} ({self.tier.width}x{self.tier.height})")

    def _complete_round(self) -> None:
        """Record a finished round and move to the next state."""
        self.round.stop()
        outcome = self.round.outcome(self.tier)
        self.history.append(outcome)
        self.total_elapsed_ms += outcome.elapsed_ms

        logger.info(
            f"Round complete on {self.tier.value} in {outcome.elapsed_ms} ms "
            f"(total {self.total_elapsed_ms} ms)"
        )

        if self.tier.is_final:
            self.state = SessionState.GAME_OVER
            logger.info(f"Team '{self.team_name}' wins in {self.total_elapsed_ms} ms")
            self._save_score()
        else:
            self.state = SessionState.ROUND_COMPLETE

    def _save_score(self) -> None:
        """Save the winning total. Failures never undo the win."""
        try:
            self.score_store.save(self.team_name, self.total_elapsed_ms)
        except Exception as e:
            logger.error(f"Failed to save score for '{self.team_name}': {e}", exc_info=True)
