"""Level generation for the shortest-path puzzle.

- GridLayout: Jittered grid node placement with shuffling
- LevelGenerator: Nearest-neighbour wiring, Dijkstra validation, bounded retry
- LevelParameters: Difficulty-derived node count and minimum path length
"""

from pathpuzzle.generators.layout import GridLayout, GridShape, RandomSource
from pathpuzzle.generators.level_generator import (
    GenerationError,
    LevelGenerator,
    LevelParameters,
)

__all__ = [
    "GridLayout",
    "GridShape",
    "RandomSource",
    "LevelGenerator",
    "LevelParameters",
    "GenerationError",
]
