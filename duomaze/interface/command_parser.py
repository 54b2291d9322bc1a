"""Translate key presses and typed commands into role moves."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..models import Direction, Role


@dataclass(frozen=True)
class MoveCommand:
    """One single-cell step for one role."""

    role: Role
    direction: Direction


class ControlCommand(Enum):
    """Non-movement commands understood by the front ends."""

    START = "start"
    NEXT = "next"
    SCORES = "scores"
    BACK = "back"
    STOP = "stop"
    HELP = "help"
    QUIT = "quit"


# WASD drives role A, arrow keys drive role B; IJKL is the typeable alias for B
DEFAULT_KEY_BINDINGS: Dict[str, MoveCommand] = {
    "w": MoveCommand(Role.A, Direction.UP),
    "s": MoveCommand(Role.A, Direction.DOWN),
    "a": MoveCommand(Role.A, Direction.LEFT),
    "d": MoveCommand(Role.A, Direction.RIGHT),
    "up": MoveCommand(Role.B, Direction.UP),
    "down": MoveCommand(Role.B, Direction.DOWN),
    "left": MoveCommand(Role.B, Direction.LEFT),
    "right": MoveCommand(Role.B, Direction.RIGHT),
    "i": MoveCommand(Role.B, Direction.UP),
    "k": MoveCommand(Role.B, Direction.DOWN),
    "j": MoveCommand(Role.B, Direction.LEFT),
    "l": MoveCommand(Role.B, Direction.RIGHT),
}

CONTROL_WORDS: Dict[str, ControlCommand] = {
    "start": ControlCommand.START,
    "new": ControlCommand.START,
    "next": ControlCommand.NEXT,
    "n": ControlCommand.NEXT,
    "scores": ControlCommand.SCORES,
    "back": ControlCommand.BACK,
    "stop": ControlCommand.STOP,
    "menu": ControlCommand.STOP,
    "help": ControlCommand.HELP,
    "h": ControlCommand.HELP,
    "?": ControlCommand.HELP,
    "quit": ControlCommand.QUIT,
    "exit": ControlCommand.QUIT,
    "q": ControlCommand.QUIT,
}


class CommandParseError(Exception):
    """Raised when a typed line contains an unknown key."""

    def __init__(self, message: str, key: str):
        self.key = key
        super().__init__(message)


class CommandParser:
    """Map keys to moves using a configurable binding table."""

    def __init__(self, bindings: Optional[Dict[str, MoveCommand]] = None):
        self.bindings = dict(bindings or DEFAULT_KEY_BINDINGS)

    def parse_key(self, key: str) -> Optional[MoveCommand]:
        """Return the move bound to ``key``, or None for unbound keys.

        Args:
            key: Key name as reported by the terminal (e.g. "w", "up")

        Returns:
            MoveCommand or None
        """
        return self.bindings.get(key.lower())

    def parse_control(self, line: str) -> Optional[ControlCommand]:
        """Return the control command for a typed word, if any."""
        return CONTROL_WORDS.get(line.strip().lower())

    def parse_line(self, line: str) -> List[MoveCommand]:
        """Parse a typed line of single-character keys into moves.

        Whitespace is ignored, so "ddss" and "d d s s" are the same.
        Multi-character key names ("up") are not accepted here.

        Args:
            line: Keys typed in text mode

        Returns:
            Moves in the order typed

        Raises:
            CommandParseError: If any character is not bound
        """
        moves = []
        for char in line.strip().lower():
            if char.isspace():
                continue
            move = self.parse_key(char)
            if move is None:
                raise CommandParseError(f"Unknown key: '{char}'", key=char)
            moves.append(move)
        return moves
