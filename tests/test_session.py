"""Tests for the game session state machine."""

import logging

import pytest

from duomaze.engine import GameSession, SessionState
from duomaze.models import DifficultyTier, Direction, Role
from duomaze.storage import InMemoryScoreStore
from duomaze.utils import ROUND_TIME_LIMIT_MS


class FailingScoreStore:
    """Score store whose every call fails like a broken disk."""

    def save(self, team_name, total_time_ms):
        raise OSError("disk full")

    def top_scores(self, limit):
        raise OSError("disk unreadable")

    def name_exists(self, team_name):
        raise OSError("disk unreadable")


@pytest.fixture
def store():
    return InMemoryScoreStore()


@pytest.fixture
def session(store, clock):
    return GameSession(score_store=store, seed=42, clock=clock)


@pytest.fixture
def walk(path_finder):
    """Move a role along the shortest path to the goal through the session."""

    def _walk(session, role):
        round_ = session.round
        path = path_finder(round_.grid, round_.position(role), round_.goal, role)
        for direction in path:
            assert session.move(role, direction)

    return _walk


@pytest.fixture
def finish_round(walk, clock):
    """Complete the current round after ``elapsed_ms`` of round time."""

    def _finish(session, elapsed_ms=1000):
        walk(session, Role.A)
        clock.advance_ms(elapsed_ms)
        walk(session, Role.B)

    return _finish


class TestStartGame:
    def test_initial_state_is_menu(self, session):
        """A new session waits in the menu."""
        assert session.state is SessionState.MENU
        assert session.round is None
        assert session.history == []

    def test_start_game_enters_playing_on_easy(self, session):
        """start_game begins on Easy."""
        session.start_game("owls")
        assert session.state is SessionState.PLAYING
        assert session.tier is DifficultyTier.EASY
        assert session.team_name == "owls"
        assert session.round.grid.width == 10

    def test_restart_clears_history_and_total(self, session, finish_round):
        """Starting again forgets the previous game."""
        session.start_game("owls")
        finish_round(session, 5000)
        assert session.total_elapsed_ms == 5000

        session.start_game("owls")
        assert session.history == []
        assert session.total_elapsed_ms == 0
        assert session.tier is DifficultyTier.EASY


class TestMovement:
    def test_moves_ignored_outside_playing(self, session):
        """Moves do nothing in the menu."""
        assert session.move(Role.A, Direction.RIGHT) is False
        assert session.state is SessionState.MENU

    def test_blocked_move_returns_false(self, session):
        """Moving into a wall is refused."""
        session.start_game("owls")
        # Border above the start cell
        assert session.move(Role.A, Direction.UP) is False
        assert session.round.position(Role.A).row == 1

    def test_one_role_at_goal_keeps_playing(self, session, walk):
        """One role on the goal does not finish the round."""
        session.start_game("owls")
        walk(session, Role.A)
        assert session.round.reached_goal(Role.A)
        assert session.state is SessionState.PLAYING


class TestRoundCompletion:
    def test_completing_easy_goes_to_round_complete(self, session, finish_round):
        """Clearing Easy records the outcome and pauses."""
        session.start_game("owls")
        finish_round(session, 15_000)

        assert session.state is SessionState.ROUND_COMPLETE
        outcome = session.last_outcome()
        assert outcome.tier is DifficultyTier.EASY
        assert outcome.completed is True
        assert outcome.elapsed_ms == 15_000

    def test_accumulated_time_is_sum_of_rounds(self, session, finish_round):
        """15 000 ms + 20 000 ms = 35 000 ms exactly."""
        session.start_game("owls")
        finish_round(session, 15_000)
        session.start_next_round()
        finish_round(session, 20_000)

        assert session.total_elapsed_ms == 35_000
        assert [o.elapsed_ms for o in session.history] == [15_000, 20_000]

    def test_moves_ignored_after_round_complete(self, session, finish_round):
        """Moves do nothing between rounds."""
        session.start_game("owls")
        finish_round(session)
        assert session.move(Role.A, Direction.LEFT) is False

    def test_tier_progression_and_ceiling(self, session, finish_round):
        """Easy, Medium, Hard, then no further tier."""
        session.start_game("owls")
        finish_round(session)
        assert session.start_next_round() is True
        assert session.tier is DifficultyTier.MEDIUM
        assert session.round.grid.width == 15

        finish_round(session)
        assert session.start_next_round() is True
        assert session.tier is DifficultyTier.HARD
        assert session.round.grid.width == 25

        finish_round(session)
        assert session.state is SessionState.GAME_OVER
        assert session.start_next_round() is False
        assert session.tier is DifficultyTier.HARD

    def test_start_next_round_requires_round_complete(self, session):
        """start_next_round is ignored outside ROUND_COMPLETE."""
        assert session.start_next_round() is False
        session.start_game("owls")
        assert session.start_next_round() is False
        assert session.tier is DifficultyTier.EASY


class TestWinAndLoss:
    def _play_to_hard(self, session, finish_round):
        session.start_game("owls")
        for _ in range(2):
            finish_round(session, 10_000)
            session.start_next_round()

    def test_completing_hard_wins(self, session, store, finish_round):
        """Clearing Hard wins and saves the total."""
        self._play_to_hard(session, finish_round)
        finish_round(session, 30_000)

        assert session.state is SessionState.GAME_OVER
        assert session.won is True
        outcome = session.last_outcome()
        assert outcome.completed is True
        assert outcome.tier is DifficultyTier.HARD
        assert session.total_elapsed_ms == 50_000

        # Winning total is saved
        assert [(e.team_name, e.total_time_ms) for e in store.entries] == [("owls", 50_000)]

    @pytest.mark.parametrize("rounds_cleared", [0, 1, 2])
    def test_timeout_on_any_tier_loses(self, session, store, clock, finish_round, rounds_cleared):
        """Running out of time on any tier loses without saving."""
        session.start_game("owls")
        for _ in range(rounds_cleared):
            finish_round(session, 10_000)
            session.start_next_round()

        clock.advance_ms(ROUND_TIME_LIMIT_MS)
        session.tick()

        assert session.state is SessionState.GAME_OVER
        assert session.won is False
        outcome = session.last_outcome()
        assert outcome.completed is False
        assert outcome.tier is session.tier
        assert len(session.history) == rounds_cleared + 1
        assert store.entries == []

    def test_timeout_does_not_add_to_total(self, session, clock, finish_round):
        """A timed-out round adds nothing to the total."""
        session.start_game("owls")
        finish_round(session, 12_000)
        session.start_next_round()
        clock.advance_ms(ROUND_TIME_LIMIT_MS)
        session.tick()
        assert session.total_elapsed_ms == 12_000

    def test_late_move_loses_without_tick(self, session, store, clock, walk, path_finder):
        """A move after the limit ends the game even if tick() never ran."""
        session.start_game("owls")
        walk(session, Role.A)
        clock.advance_ms(ROUND_TIME_LIMIT_MS + 5000)

        round_ = session.round
        path = path_finder(round_.grid, round_.position(Role.B), round_.goal, Role.B)
        assert session.move(Role.B, path[0]) is False
        for direction in path[1:]:
            session.move(Role.B, direction)

        assert session.state is SessionState.GAME_OVER
        assert session.won is False
        outcome = session.last_outcome()
        assert outcome.completed is False
        assert outcome.elapsed_ms == ROUND_TIME_LIMIT_MS + 5000
        assert session.total_elapsed_ms == 0
        assert len(session.history) == 1
        assert store.entries == []

    def test_moves_ignored_after_game_over(self, session, clock):
        """Moves do nothing after the game ends."""
        session.start_game("owls")
        clock.advance_ms(ROUND_TIME_LIMIT_MS)
        session.tick()
        assert session.move(Role.B, Direction.RIGHT) is False

    def test_can_start_again_after_game_over(self, session, clock):
        """A lost game can be restarted."""
        session.start_game("owls")
        clock.advance_ms(ROUND_TIME_LIMIT_MS)
        session.tick()
        session.start_game("owls")
        assert session.state is SessionState.PLAYING
        assert session.history == []


class TestTick:
    def test_tick_before_limit_does_nothing(self, session, clock):
        """tick leaves a round inside its limit alone."""
        session.start_game("owls")
        clock.advance_ms(ROUND_TIME_LIMIT_MS - 1)
        session.tick()
        assert session.state is SessionState.PLAYING
        assert session.history == []

    def test_tick_is_idempotent(self, session, clock):
        """Repeated ticks record the timeout once."""
        session.start_game("owls")
        clock.advance_ms(ROUND_TIME_LIMIT_MS + 500)
        for _ in range(5):
            session.tick()
        assert session.state is SessionState.GAME_OVER
        assert len(session.history) == 1
        assert session.history[0].elapsed_ms == ROUND_TIME_LIMIT_MS + 500

    def test_tick_outside_playing_is_noop(self, session, clock, finish_round):
        """tick does nothing when no round is running."""
        session.tick()
        assert session.state is SessionState.MENU

        session.start_game("owls")
        finish_round(session)
        clock.advance_ms(ROUND_TIME_LIMIT_MS * 2)
        session.tick()
        assert session.state is SessionState.ROUND_COMPLETE
        assert len(session.history) == 1


class TestStopGame:
    @pytest.mark.parametrize("setup", ["menu", "playing", "round_complete", "game_over", "scoreboard"])
    def test_stop_from_any_state_returns_to_menu(self, session, clock, finish_round, setup):
        """stop_game returns to the menu from every state."""
        if setup == "playing":
            session.start_game("owls")
        elif setup == "round_complete":
            session.start_game("owls")
            finish_round(session)
        elif setup == "game_over":
            session.start_game("owls")
            clock.advance_ms(ROUND_TIME_LIMIT_MS)
            session.tick()
        elif setup == "scoreboard":
            session.request_scoreboard()

        session.stop_game()
        assert session.state is SessionState.MENU
        assert session.round is None

    def test_stop_records_no_outcome(self, session, walk):
        """A stopped round leaves no outcome or time."""
        session.start_game("owls")
        walk(session, Role.A)
        session.stop_game()
        assert session.history == []
        assert session.total_elapsed_ms == 0
        assert session.move(Role.B, Direction.RIGHT) is False


class TestScoreboard:
    def test_scoreboard_round_trip(self, session, store):
        """Menu to scoreboard and back."""
        store.save("slow", 90_000)
        store.save("fast", 40_000)

        entries = session.request_scoreboard()
        assert session.state is SessionState.SCOREBOARD
        assert [e.team_name for e in entries] == ["fast", "slow"]

        session.back()
        assert session.state is SessionState.MENU

    def test_scoreboard_only_from_menu(self, session):
        """The scoreboard cannot open mid-game."""
        session.start_game("owls")
        assert session.request_scoreboard() == []
        assert session.state is SessionState.PLAYING

    def test_back_outside_scoreboard_is_noop(self, session):
        """back only leaves the scoreboard."""
        session.start_game("owls")
        session.back()
        assert session.state is SessionState.PLAYING

    def test_team_name_taken(self, session, store):
        """Saved team names are reported as taken."""
        store.save("owls", 1000)
        assert session.team_name_taken("owls") is True
        assert session.team_name_taken("larks") is False


class TestStoreFailures:
    """A failing score store never blocks or reverts a transition."""

    @pytest.fixture
    def failing_session(self, clock):
        return GameSession(score_store=FailingScoreStore(), seed=42, clock=clock)

    def test_win_survives_save_failure(self, failing_session, finish_round, caplog):
        """A failed save is logged and the win stands."""
        session = failing_session
        session.start_game("owls")
        for _ in range(2):
            finish_round(session)
            session.start_next_round()

        with caplog.at_level(logging.ERROR):
            finish_round(session)

        assert session.state is SessionState.GAME_OVER
        assert session.won is True
        assert "Failed to save score" in caplog.text

    def test_scoreboard_failure_shows_empty(self, failing_session):
        """A failing store shows an empty board."""
        entries = failing_session.request_scoreboard()
        assert entries == []
        assert failing_session.state is SessionState.SCOREBOARD

    def test_name_check_failure_is_not_taken(self, failing_session):
        """A failing name check lets the team play."""
        assert failing_session.team_name_taken("owls") is False


class TestDeterminism:
    def test_same_seed_replays_same_mazes(self, clock, finish_round):
        """Equal seeds replay the same maze sequence."""
        first = GameSession(seed=9, clock=clock)
        second = GameSession(seed=9, clock=clock)
        for session in (first, second):
            session.start_game("owls")
        assert first.round.grid.tiles == second.round.grid.tiles

        for session in (first, second):
            finish_round(session)
            session.start_next_round()
        assert first.round.grid.tiles == second.round.grid.tiles


def test_get_state_snapshot(session):
    """get_state describes the menu and a running round."""
    snapshot = session.get_state()
    assert snapshot["state"] == "MENU"
    assert snapshot["grid"] is None

    session.start_game("owls")
    snapshot = session.get_state()
    assert snapshot["state"] == "PLAYING"
    assert snapshot["tier"] == "easy"
    assert snapshot["grid"] == {"width": 10, "height": 10}
    assert snapshot["roles"]["A"] == {"col": 1, "row": 1, "reachedGoal": False}
    assert snapshot["remainingMs"] == ROUND_TIME_LIMIT_MS
