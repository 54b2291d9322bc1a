"""Textual TUI application for Duo Maze.

Displays the maze, a status line and an event log, forwards key presses to
the game session, and polls the session clock so rounds time out on schedule.
"""

import logging

from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, RichLog, Static

from ..engine.session import GameSession, SessionState
from ..utils import TICK_INTERVAL_MS
from .command_parser import CommandParser
from .renderer import MazeRenderer

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "[bold]Role A[/bold]: W A S D    [bold]Role B[/bold]: arrow keys\n"
    "Both roles must reach [green]G[/green]. 'a' walls let only A through, 'b' walls only B.\n"
    "Enter: start / next round   F2: scoreboard   Esc: back / stop   Ctrl+C: quit"
)


def duplicate_team_message(team_name: str) -> str:
    """Log markup refusing a team name that is already on the scoreboard."""
    return (
        f"Team '{escape(team_name)}' is already on the scoreboard. "
        "Restart with a different --team."
    )


def scoreboard_markup(table: str) -> str:
    """Rendered scoreboard with team names made safe for markup."""
    return escape(table)


class MazePanel(Static):
    """Widget to display the maze."""

    def __init__(self, *args, **kwargs):
        """Initialize maze panel."""
        super().__init__(*args, **kwargs)
        self.renderer = MazeRenderer()
        self.border_title = "Maze"

    def update_maze(self, session: GameSession) -> None:
        if session.round is None:
            self.update("")
            return
        self.update(self.renderer.render(session.round))


class StatusPanel(Static):
    """Single-line HUD with state, tier and remaining time."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.renderer = MazeRenderer()

    def update_status(self, session: GameSession) -> None:
        self.update(self.renderer.render_status(session))


class EventLog(RichLog):
    """Scrolling log of round results and messages."""

    can_focus = False

    def __init__(self, *args, **kwargs):
        """Initialize event log."""
        super().__init__(*args, highlight=False, markup=True, wrap=True, **kwargs)

    def show_info(self, message: str) -> None:
        self.write(message)

    def show_error(self, message: str) -> None:
        self.write(f"[red]{message}[/red]")

    def show_success(self, message: str) -> None:
        self.write(f"[green]{message}[/green]")


class MazeApp(App):
    """Duo Maze TUI application."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #maze_container {
        height: 1fr;
        border: solid green;
        content-align: center middle;
    }

    MazePanel {
        width: auto;
        height: auto;
    }

    StatusPanel {
        height: 1;
        background: $surface;
        color: cyan;
    }

    #log_container {
        height: 9;
        border: solid cyan;
    }

    EventLog {
        height: 1fr;
        border: none;
    }
    """

    BINDINGS = [
        Binding("enter", "primary", "Start / Next", show=True),
        Binding("f2", "scoreboard", "Scores", show=True),
        Binding("escape", "back", "Back / Stop", show=True),
        Binding("ctrl+h", "show_help", "Help", show=True),
        Binding("ctrl+c", "quit", "Quit", show=True),
    ]

    def __init__(self, session: GameSession, team_name: str, *args, **kwargs):
        """Initialize the TUI app.

        Args:
            session: Game session driven by this app
            team_name: Team recorded on the scoreboard after a win
        """
        super().__init__(*args, **kwargs)
        self.session = session
        self.team_name = team_name
        self.parser = CommandParser()
        self.renderer = MazeRenderer()
        self.maze_panel = None
        self.status_panel = None
        self.event_log = None
        self._last_state = session.state

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()

        maze_container = Container(id="maze_container")
        with maze_container:
            self.maze_panel = MazePanel()
            yield self.maze_panel

        self.status_panel = StatusPanel()
        yield self.status_panel

        log_container = Container(id="log_container")
        log_container.border_title = "Log"
        with log_container:
            self.event_log = EventLog()
            yield self.event_log

        yield Footer()

    def on_mount(self) -> None:
        """Show the welcome text and start polling the round clock."""
        self.title = "Duo Maze"
        self.sub_title = f"Team {self.team_name}"
        self.event_log.show_info(HELP_TEXT)
        self.event_log.show_info("Press [bold]Enter[/bold] to start.")
        self.set_interval(TICK_INTERVAL_MS / 1000, self.poll_clock)
        self.refresh_display()

    def poll_clock(self) -> None:
        """Periodic clock check; only redraws the maze when the state changed."""
        self.session.tick()
        self.status_panel.update_status(self.session)
        if self.session.state is not self._last_state:
            self.refresh_display()

    def on_key(self, event: events.Key) -> None:
        """Forward movement keys to the session."""
        move = self.parser.parse_key(event.key)
        if move is None:
            return

        event.stop()
        if self.session.move(move.role, move.direction):
            self.refresh_display()

    def refresh_display(self) -> None:
        """Redraw all panels and report state changes in the log."""
        self.maze_panel.update_maze(self.session)
        self.status_panel.update_status(self.session)

        if self.session.state is not self._last_state:
            self._last_state = self.session.state
            banner = self.renderer.render_result(self.session)
            if banner is None:
                return
            if self.session.state is SessionState.GAME_OVER and not self.session.won:
                self.event_log.show_error(banner)
            else:
                self.event_log.show_success(banner)

    def action_primary(self) -> None:
        """Enter: start a game from the menu/game over, or the next round."""
        state = self.session.state
        if state is SessionState.ROUND_COMPLETE:
            self.session.start_next_round()
            self.event_log.show_info(f"Starting {self.session.tier.value.title()}...")
        elif state in (SessionState.MENU, SessionState.GAME_OVER):
            if self.session.team_name_taken(self.team_name):
                self.event_log.show_error(duplicate_team_message(self.team_name))
                logger.warning(f"Rejected duplicate team name '{self.team_name}'")
                return
            self.session.start_game(self.team_name)
            self.event_log.show_info("Go! Both roles must reach the goal.")
        self.refresh_display()

    def action_scoreboard(self) -> None:
        if self.session.state is SessionState.GAME_OVER:
            self.session.stop_game()
        entries = self.session.request_scoreboard()
        if self.session.state is SessionState.SCOREBOARD:
            self.event_log.show_info(scoreboard_markup(self.renderer.render_scoreboard(entries)))
        self.refresh_display()

    def action_back(self) -> None:
        """Esc: leave the scoreboard, or abandon the current game."""
        if self.session.state is SessionState.SCOREBOARD:
            self.session.back()
        elif self.session.state is not SessionState.MENU:
            self.session.stop_game()
            self.event_log.show_info("Game stopped. Press Enter to start again.")
        self.refresh_display()

    def action_show_help(self) -> None:
        self.event_log.show_info(HELP_TEXT)
