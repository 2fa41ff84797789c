"""Plane geometry helpers for level generation.

Board coordinates are plain 2D points (pixels of the playing field), so
distances are Euclidean.
"""

from math import floor, hypot


class PlaneCalculator:
    """Static helpers for board-space calculations."""

    @staticmethod
    def distance(x1: float, y1: float, x2: float, y2: float) -> float:
        """Euclidean distance between (x1, y1) and (x2, y2)."""
        return hypot(x2 - x1, y2 - y1)

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to nearest integer with .5 going up.

        Python's round() uses banker's rounding (round(2.5) == 2). Edge weights
        must round 2.5 to 3 so the same layout always yields the same weights.
        """
        return floor(value + 0.5)

    @staticmethod
    def random_index(u: float, size: int) -> int:
        """Map a uniform draw u in [0, 1) to an index in range(size)."""
        return min(size - 1, floor(u * size))
