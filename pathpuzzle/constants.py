"""Configuration constants for the shortest-path puzzle.

All tunable parameters are centralized here.

Classes:
    LayoutConfig: Coordinate region and grid jitter for node placement
    LevelConfig: Difficulty scaling (node count, minimum solution length)
    WeightConfig: Edge weight derivation from distance
    GenerationConfig: Retry ceiling for level generation
    StorageConfig: Save file location and record format version
"""

from pathlib import Path

# Package root directory (where pathpuzzle/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of pathpuzzle/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Output directory for saved games
OUTPUT_DIR = PROJECT_ROOT / "output"


class LayoutConfig:
    """Coordinate region nodes are placed in.

    The region matches the board the presentation layer draws on.
    """

    WIDTH = 800.0
    HEIGHT = 600.0
    PADDING = 100.0  # Empty border on every side

    # Jitter as a fraction of cell size (0.5 = node stays in the middle half of its cell)
    JITTER_FACTOR = 0.5

    # Node labels are consecutive letters starting here ("A", "B", ...)
    LABEL_START = "A"


class LevelConfig:
    """Difficulty scaling for generated levels."""

    FIRST_LEVEL = 1

    # Node count = min(MAX_NODES, BASE_NODES + floor(level * NODES_PER_LEVEL))
    BASE_NODES = 3
    NODES_PER_LEVEL = 1.5
    MAX_NODES = 26

    # Each node is wired to this many nearest neighbours
    NEAREST_NEIGHBORS = 2

    # Above this level the source and target may not share a direct edge
    DIRECT_EDGE_MAX_LEVEL = 1

    # Minimum solution path length (nodes, inclusive) =
    # min(node_count - 1, MIN_PATH_BASE + floor(level / MIN_PATH_LEVEL_STEP))
    MIN_PATH_BASE = 2
    MIN_PATH_LEVEL_STEP = 4


# Labels must stay within A-Z
assert LevelConfig.MAX_NODES <= 26, "Node labels only cover A-Z"
assert LevelConfig.NEAREST_NEIGHBORS < LevelConfig.BASE_NODES, "Need more nodes than neighbours per node"


class WeightConfig:
    """Edge weight = round(distance / DISTANCE_SCALE) + random int in [MIN_JITTER, MIN_JITTER + JITTER_RANGE)."""

    DISTANCE_SCALE = 20.0
    JITTER_RANGE = 5
    MIN_JITTER = 1


assert WeightConfig.MIN_JITTER >= 0, "Edge weights must stay non-negative"


class GenerationConfig:
    """Level generation retry policy."""

    # Random sparse nearest-neighbour graphs usually pass within a few attempts.
    # The ceiling only guards against parameters that can never be satisfied.
    MAX_ATTEMPTS = 5000


class StorageConfig:
    """Save file settings."""

    RECORD_VERSION = "1.0"
    SAVE_DIR = OUTPUT_DIR / "pathpuzzle"
    SAVE_FILENAME = "save.json"
