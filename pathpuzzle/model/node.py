"""Node - A labelled point of the puzzle graph.

Node IDs are dense and contiguous from 0, so a node's ID is also its index
in PuzzleGraph.nodes. The position only matters for level generation and
drawing; the shortest-path query ignores it.
"""

from dataclasses import dataclass
from typing import Any

from pathpuzzle.core.geometry import PlaneCalculator


@dataclass(frozen=True)
class Node:
    """A point in the puzzle graph.

    Attributes:
        id: Dense integer identifier (0, 1, 2, ...)
        x: Horizontal board coordinate
        y: Vertical board coordinate
        label: Display label (e.g., "A")

    Example:
        node = Node(id=0, x=120.0, y=140.0, label="A")
    """

    id: int
    x: float
    y: float
    label: str

    def distance_to(self, other: "Node") -> float:
        """Euclidean distance to another node in board units."""
        return PlaneCalculator.distance(x1=self.x, y1=self.y, x2=other.x, y2=other.y)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Create Node from dictionary."""
        return cls(
            id=int(data["id"]),
            x=float(data["x"]),
            y=float(data["y"]),
            label=str(data["label"]),
        )

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.label!r}, x={self.x:.1f}, y={self.y:.1f})"
