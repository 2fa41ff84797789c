"""PuzzleGraph - Weighted undirected graph with a shortest-path query.

Owns nodes, edges and the adjacency mapping. Provides operations for:
- Building the graph (add_node, add_edge, clear)
- Shortest-path search (Dijkstra with single-target early exit)
- Player path helpers (adjacency checks, path cost)
- Serialization/deserialization

The adjacency mapping is the traversal structure and is kept in sync with
the edge list: every edge insertion appends to both endpoints' lists.
There is no edge removal, only clear().
"""

import math
from typing import Any, Iterable, Sequence

from pathpuzzle.core.priority_queue import PriorityQueue
from pathpuzzle.model.edge import Edge, Neighbor
from pathpuzzle.model.node import Node
from pathpuzzle.model.solution import Solution


class UnknownNodeError(KeyError):
    """Raised when an operation references a node ID not in the graph."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Unknown node: {self.node_id}"


class PuzzleGraph:
    """Graph of the puzzle board.

    Node IDs must be added densely from 0 (node ID == index in nodes).

    Example:
        graph = PuzzleGraph()
        graph.add_node(node_id=0, x=0, y=0, label="A")
        graph.add_node(node_id=1, x=10, y=0, label="B")
        graph.add_edge(from_id=0, to_id=1, weight=4)
        graph.dijkstra(start_id=0, end_id=1)  # Solution(distance=4, path=(0, 1))
    """

    def __init__(self) -> None:
        """Initialize empty graph."""
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.adjacency: dict[int, list[Neighbor]] = {}

    # =========================================================================
    # Build Operations
    # =========================================================================

    def add_node(self, node_id: int, x: float, y: float, label: str) -> Node:
        """Append a node and give it an empty adjacency list.

        Args:
            node_id: Must equal the current node count (dense IDs from 0)
            x, y: Board position
            label: Display label

        Returns:
            The created Node.

        Raises:
            ValueError: If node_id is not the next dense ID.
        """
        if node_id != len(self.nodes):
            raise ValueError(f"Node IDs must be dense from 0: expected {len(self.nodes)}, got {node_id}")

        node = Node(id=node_id, x=x, y=y, label=label)
        self.nodes.append(node)
        self.adjacency[node_id] = []
        return node

    def add_edge(self, from_id: int, to_id: int, weight: int) -> bool:
        """Connect two nodes in both directions.

        Adding an edge between an already connected pair is a no-op and the
        original weight is kept.

        Args:
            from_id: First endpoint
            to_id: Second endpoint
            weight: Non-negative integer cost

        Returns:
            True if the edge was added, False if the pair was already connected.

        Raises:
            UnknownNodeError: If either endpoint is not in the graph.
            ValueError: If weight is negative or the edge is a self-loop.
        """
        self._require_node(node_id=from_id)
        self._require_node(node_id=to_id)
        if weight < 0:
            raise ValueError(f"Edge weight must be non-negative, got {weight} for {from_id}-{to_id}")
        if from_id == to_id:
            raise ValueError(f"Self-loop on node {from_id} is not allowed")

        if self.has_edge(a=from_id, b=to_id):
            return False

        self.edges.append(Edge(from_id=from_id, to_id=to_id, weight=weight))
        self.adjacency[from_id].append(Neighbor(node_id=to_id, weight=weight))
        self.adjacency[to_id].append(Neighbor(node_id=from_id, weight=weight))
        return True

    def clear(self) -> None:
        """Remove all nodes, edges and adjacency lists."""
        self.nodes = []
        self.edges = []
        self.adjacency = {}

    # =========================================================================
    # Query Operations
    # =========================================================================

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.adjacency

    def neighbors(self, node_id: int) -> list[Neighbor]:
        """Adjacency list of a node.

        Raises:
            UnknownNodeError: If node_id is not in the graph.
        """
        self._require_node(node_id=node_id)
        return self.adjacency[node_id]

    def has_edge(self, a: int, b: int) -> bool:
        """True if a and b are directly connected."""
        return any(nb.node_id == b for nb in self.adjacency.get(a, []))

    def edge_weight(self, a: int, b: int) -> int:
        """Weight of the edge between a and b.

        Raises:
            UnknownNodeError: If a is not in the graph.
            ValueError: If a and b are not connected.
        """
        for nb in self.neighbors(node_id=a):
            if nb.node_id == b:
                return nb.weight
        raise ValueError(f"No edge between {a} and {b}")

    def path_cost(self, path: Sequence[int]) -> int:
        """Sum of edge weights along a path of consecutive neighbours.

        Args:
            path: Node IDs in travel order (a single node costs 0)

        Raises:
            ValueError: If two consecutive nodes are not connected.
        """
        return sum(self.edge_weight(a=a, b=b) for a, b in zip(path, path[1:]))

    # =========================================================================
    # Shortest Path
    # =========================================================================

    def dijkstra(self, start_id: int, end_id: int) -> Solution:
        """Shortest path from start_id to end_id.

        Dijkstra's algorithm with a sorted-list priority queue. The search
        stops as soon as the target is dequeued. The queue may hold stale
        entries for nodes whose distance improved after they were queued;
        those are skipped since the fresher entry was already processed.

        Args:
            start_id: Source node
            end_id: Target node

        Returns:
            Solution with the distance and the path (start..end inclusive).
            Unreachable targets give Solution(math.inf, ()).

        Raises:
            UnknownNodeError: If start_id or end_id is not in the graph.
        """
        self._require_node(node_id=start_id)
        self._require_node(node_id=end_id)

        distances: dict[int, float] = {node.id: math.inf for node in self.nodes}
        previous: dict[int, int | None] = {node.id: None for node in self.nodes}
        pq: PriorityQueue[int] = PriorityQueue()

        distances[start_id] = 0
        pq.enqueue(element=start_id, priority=0)

        while not pq.is_empty():
            entry = pq.dequeue()
            current = entry.element

            if current == end_id:
                break
            if entry.priority > distances[current]:
                continue

            for nb in self.adjacency[current]:
                alt = distances[current] + nb.weight
                if alt < distances[nb.node_id]:
                    distances[nb.node_id] = alt
                    previous[nb.node_id] = current
                    pq.enqueue(element=nb.node_id, priority=alt)

        path = self._reconstruct_path(previous=previous, end_id=end_id)
        if path[0] != start_id:
            return Solution.unreachable()

        return Solution(distance=distances[end_id], path=tuple(path))

    @staticmethod
    def _reconstruct_path(previous: dict[int, int | None], end_id: int) -> list[int]:
        """Walk predecessors back from end_id and return the path in travel order."""
        path = []
        current: int | None = end_id
        while current is not None:
            path.append(current)
            current = previous[current]
        path.reverse()
        return path

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize nodes and edges to a JSON-compatible dict."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PuzzleGraph":
        """Rebuild a graph from its node and edge lists."""
        return cls.from_parts(
            nodes=(Node.from_dict(data=n) for n in data["nodes"]),
            edges=(Edge.from_dict(data=e) for e in data["edges"]),
        )

    @classmethod
    def from_parts(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> "PuzzleGraph":
        """Build a graph by replaying node and edge insertions in order."""
        graph = cls()
        for node in sorted(nodes, key=lambda n: n.id):
            graph.add_node(node_id=node.id, x=node.x, y=node.y, label=node.label)
        for edge in edges:
            graph.add_edge(from_id=edge.from_id, to_id=edge.to_id, weight=edge.weight)
        return graph

    # =========================================================================
    # Internal
    # =========================================================================

    def _require_node(self, node_id: int) -> None:
        if node_id not in self.adjacency:
            raise UnknownNodeError(node_id=node_id)

    def __repr__(self) -> str:
        return f"PuzzleGraph(nodes={self.node_count}, edges={self.edge_count})"
