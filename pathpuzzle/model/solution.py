"""Solution - Result of a shortest-path query."""

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Solution:
    """Shortest distance and path between two nodes.

    An unreachable target is a regular result: distance is math.inf and the
    path is empty. Callers must check is_reachable.

    Attributes:
        distance: Sum of edge weights along the path, or math.inf
        path: Node IDs from source to target inclusive, or () if unreachable
    """

    distance: float
    path: tuple[int, ...]

    @classmethod
    def unreachable(cls) -> "Solution":
        return cls(distance=math.inf, path=())

    @property
    def is_reachable(self) -> bool:
        return math.isfinite(self.distance)

    @property
    def intermediate_count(self) -> int:
        """Number of nodes strictly between source and target."""
        return max(0, len(self.path) - 2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with infinity stored as None (JSON has no infinity)."""
        return {
            "distance": self.distance if self.is_reachable else None,
            "path": list(self.path),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Solution":
        distance: Optional[float] = data["distance"]
        return cls(
            distance=math.inf if distance is None else distance,
            path=tuple(int(node_id) for node_id in data["path"]),
        )
