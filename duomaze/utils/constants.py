"""Game configuration constants."""

# Difficulty tiers: (width, height) of the generated grid
TIER_SIZES = {
    "easy": (10, 10),
    "medium": (15, 15),
    "hard": (25, 25),
}

# Shared spawn cell for both roles (col, row)
START_COL = 1
START_ROW = 1

# Round timing
ROUND_TIME_LIMIT_MS = 60_000  # Same limit for every tier
TICK_INTERVAL_MS = 100  # How often the UI polls for timeouts

# Role-restricted wall placement
ROLE_WALL_DENSITY = 0.08  # Fraction of all cells
ROLE_WALL_MIN_DISTANCE = 3  # Manhattan distance from start and goal must exceed this
ROLE_WALL_ATTEMPT_FACTOR = 20  # Sampling attempts per requested role wall

# Scoreboard
SCOREBOARD_LIMIT = 10

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
