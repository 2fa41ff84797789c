"""Grid layout - Jittered grid placement of puzzle nodes.

Nodes are spread over a grid whose aspect ratio follows the board, each node
sitting near its cell centre with a random offset. The positions are then
shuffled so node IDs (and with them source and target) land in unpredictable
cells.
"""

from dataclasses import dataclass
from math import ceil, sqrt
from typing import Callable

import numpy as np

from pathpuzzle.constants import LayoutConfig
from pathpuzzle.core.geometry import PlaneCalculator

# Zero-argument callable returning uniform floats in [0, 1)
RandomSource = Callable[[], float]


@dataclass(frozen=True)
class GridShape:
    """Grid dimensions for a node count."""

    cols: int
    rows: int
    cell_width: float
    cell_height: float

    @classmethod
    def for_node_count(cls, node_count: int) -> "GridShape":
        """Pick columns from the board aspect ratio, then enough rows to fit every node."""
        if node_count < 1:
            raise ValueError(f"node_count must be positive, got {node_count}")

        aspect = LayoutConfig.WIDTH / LayoutConfig.HEIGHT
        cols = ceil(sqrt(node_count * aspect))
        rows = ceil(node_count / cols)
        return cls(
            cols=cols,
            rows=rows,
            cell_width=(LayoutConfig.WIDTH - 2 * LayoutConfig.PADDING) / cols,
            cell_height=(LayoutConfig.HEIGHT - 2 * LayoutConfig.PADDING) / rows,
        )


class GridLayout:
    """Places nodes on a jittered grid.

    Example:
        layout = GridLayout(random_source=random.Random(7).random)
        positions = layout.place(node_count=10)  # shape (10, 2)
    """

    def __init__(self, random_source: RandomSource) -> None:
        self.random_source = random_source

    def place(self, node_count: int) -> np.ndarray:
        """Jittered, shuffled positions.

        Returns:
            Array of shape (node_count, 2) with (x, y) rows.
        """
        positions = self._jittered_grid(node_count=node_count)
        self._shuffle(positions=positions)
        return positions

    def _jittered_grid(self, node_count: int) -> np.ndarray:
        """Fill cells row by row until node_count positions exist."""
        shape = GridShape.for_node_count(node_count=node_count)
        positions = np.empty((node_count, 2), dtype=float)

        index = 0
        for row in range(shape.rows):
            for col in range(shape.cols):
                if index >= node_count:
                    return positions
                x = (
                    LayoutConfig.PADDING
                    + col * shape.cell_width
                    + shape.cell_width / 2
                    + (self.random_source() - 0.5) * (shape.cell_width * LayoutConfig.JITTER_FACTOR)
                )
                y = (
                    LayoutConfig.PADDING
                    + row * shape.cell_height
                    + shape.cell_height / 2
                    + (self.random_source() - 0.5) * (shape.cell_height * LayoutConfig.JITTER_FACTOR)
                )
                positions[index] = (x, y)
                index += 1
        return positions

    def _shuffle(self, positions: np.ndarray) -> None:
        """Fisher-Yates shuffle in place, driven by the injected random source."""
        for i in range(len(positions) - 1, 0, -1):
            j = PlaneCalculator.random_index(u=self.random_source(), size=i + 1)
            positions[[i, j]] = positions[[j, i]]
