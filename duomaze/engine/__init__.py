"""Game engine components."""

from .maze_generator import GeneratedMaze, generate_maze
from .passability import can_occupy
from .round_lifecycle import RoundLifecycle
from .session import GameSession, SessionState

__all__ = [
    "GeneratedMaze",
    "generate_maze",
    "can_occupy",
    "RoundLifecycle",
    "GameSession",
    "SessionState",
]
