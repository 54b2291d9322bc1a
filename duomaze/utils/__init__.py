"""Utility functions and constants for Duo Maze."""

from .clock import Clock, RoundTimer
from .constants import (
    RNG_SEED_DEFAULT,
    ROLE_WALL_ATTEMPT_FACTOR,
    ROLE_WALL_DENSITY,
    ROLE_WALL_MIN_DISTANCE,
    ROUND_TIME_LIMIT_MS,
    SCOREBOARD_LIMIT,
    START_COL,
    START_ROW,
    TICK_INTERVAL_MS,
    TIER_SIZES,
)
from .distance import manhattan_distance
from .rng import GameRNG

__all__ = [
    "RNG_SEED_DEFAULT",
    "ROLE_WALL_ATTEMPT_FACTOR",
    "ROLE_WALL_DENSITY",
    "ROLE_WALL_MIN_DISTANCE",
    "ROUND_TIME_LIMIT_MS",
    "SCOREBOARD_LIMIT",
    "START_COL",
    "START_ROW",
    "TICK_INTERVAL_MS",
    "TIER_SIZES",
    "Clock",
    "RoundTimer",
    "manhattan_distance",
    "GameRNG",
]
