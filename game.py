#!/usr/bin/env python3
"""Duo Maze - Main entry point.

A cooperative maze race: two roles with different wall permissions must both
reach the goal of an Easy, a Medium and a Hard maze, each within a minute.
"""

import argparse
import logging
import sys

from duomaze.engine.session import GameSession, SessionState
from duomaze.interface.command_parser import CommandParseError, CommandParser, ControlCommand
from duomaze.interface.renderer import MazeRenderer
from duomaze.storage import InMemoryScoreStore, JsonScoreStore
from duomaze.utils import RNG_SEED_DEFAULT

logger = logging.getLogger(__name__)

TEXT_HELP = """
Role A: w/a/s/d    Role B: i/j/k/l    (type several keys per line, e.g. "ddss")
Commands: start, next, scores, back, stop, help, quit
Both roles must reach G. 'a' walls let only A through, 'b' walls only B.
The clock keeps running while you type.
"""


class TextGame:
    """Line-based front end for terminals without TUI support."""

    def __init__(self, session: GameSession, team_name: str):
        self.session = session
        self.team_name = team_name
        self.parser = CommandParser()
        self.renderer = MazeRenderer()

    def run(self) -> None:
        """Main input loop."""
        print("\n" + "=" * 60)
        print("Duo Maze")
        print("=" * 60)
        print(TEXT_HELP)

        try:
            while True:
                self.session.tick()
                self._show()
                line = input(f"{self.session.state.value.lower()}> ")
                # Time passed while waiting for input
                self.session.tick()
                if not self._handle(line):
                    break
        except (KeyboardInterrupt, EOFError):
            print("\n\nGame interrupted by user. Exiting...")

    def _show(self) -> None:
        if self.session.state is SessionState.PLAYING:
            print(self.renderer.render(self.session.round))
        banner = self.renderer.render_result(self.session)
        if banner:
            print(banner)
        print(self.renderer.render_status(self.session))

    def _handle(self, line: str) -> bool:
        """Apply one typed line. Returns False when the player quits."""
        control = self.parser.parse_control(line)

        if control is ControlCommand.QUIT:
            return False
        if control is ControlCommand.HELP:
            print(TEXT_HELP)
        elif control is ControlCommand.START:
            self._start()
        elif control is ControlCommand.NEXT:
            if not self.session.start_next_round():
                print("No round to advance to.")
        elif control is ControlCommand.SCORES:
            if self.session.state is SessionState.GAME_OVER:
                self.session.stop_game()
            entries = self.session.request_scoreboard()
            if self.session.state is SessionState.SCOREBOARD:
                print(self.renderer.render_scoreboard(entries))
            else:
                print("Stop the current game first.")
        elif control is ControlCommand.BACK:
            self.session.back()
        elif control is ControlCommand.STOP:
            self.session.stop_game()
        else:
            self._move(line)
        return True

    def _start(self) -> None:
        if self.session.team_name_taken(self.team_name):
            print(f"Team '{self.team_name}' is already on the scoreboard. Use a different --team.")
            logger.warning(f"Rejected duplicate team name '{self.team_name}'")
            return
        self.session.start_game(self.team_name)

    def _move(self, line: str) -> None:
        try:
            moves = self.parser.parse_line(line)
        except CommandParseError as e:
            print(f"{e} (type 'help' for keys)")
            return

        if self.session.state is not SessionState.PLAYING:
            if moves:
                print("Not playing. Type 'start' to begin.")
            return

        for move in moves:
            self.session.tick()
            if self.session.state is not SessionState.PLAYING:
                break
            self.session.move(move.role, move.direction)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Duo Maze - Cooperative two-role maze race",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --team owls                          # Start the TUI as team "owls"
  %(prog)s --team owls --scores scores.json     # Keep scores between runs
  %(prog)s --team owls --text --seed 7          # Plain text mode, fixed mazes
        """,
    )

    parser.add_argument("--team", type=str, default="team", help="Team name (default: team)")
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for maze generation (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--scores",
        type=str,
        metavar="FILE",
        default=None,
        help="JSON file for the scoreboard (default: scores kept in memory only)",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Use the plain line-based interface instead of the TUI",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="FILE",
        default="duomaze.log",
        help="Log destination in TUI mode (default: duomaze.log)",
    )

    args = parser.parse_args()

    # The TUI owns the terminal, so it logs to a file instead of stdout
    log_level = logging.DEBUG if args.debug else logging.INFO
    if args.text:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.FileHandler(args.log_file, encoding="utf-8")
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    score_store = JsonScoreStore(args.scores) if args.scores else InMemoryScoreStore()
    session = GameSession(score_store=score_store, seed=args.seed)

    if args.text:
        TextGame(session, args.team).run()
    else:
        from duomaze.interface.tui_app import MazeApp

        MazeApp(session, args.team).run()


if __name__ == "__main__":
    main()
