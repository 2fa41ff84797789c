"""Edge and Neighbor - Weighted undirected connections.

Edge is the record kept in PuzzleGraph.edges (one per unordered pair).
Neighbor is the adjacency-list view of the same edge from one endpoint.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Edge:
    """Undirected weighted connection between two nodes.

    from_id/to_id keep the order the edge was added in; traversal works both ways.

    Attributes:
        from_id: First endpoint
        to_id: Second endpoint
        weight: Non-negative integer cost
    """

    from_id: int
    to_id: int
    weight: int

    def to_dict(self) -> dict[str, Any]:
        return {"from": self.from_id, "to": self.to_id, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        """Create Edge from dictionary."""
        return cls(from_id=int(data["from"]), to_id=int(data["to"]), weight=int(data["weight"]))


@dataclass(frozen=True)
class Neighbor:
    """Adjacency entry: the node reachable over an edge and the edge weight."""

    node_id: int
    weight: int
