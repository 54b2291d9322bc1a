"""Duo Maze: a two-role cooperative maze race."""

__version__ = "1.0.0"
