"""Level - A validated puzzle graph with its cached optimal solution.

A Level is produced once by the LevelGenerator and then handed read-only to
the game layer. The optimal solution is computed during generation and is
never recomputed afterwards; restoring a saved level rebuilds the graph from
the record and takes the solution from the record as well.

Record format (JSON-compatible):
    {
        "version": "1.0",
        "level": 3,
        "nodes": [{"id": 0, "x": 120.5, "y": 140.2, "label": "A"}, ...],
        "edges": [{"from": 0, "to": 4, "weight": 7}, ...],
        "source": 0,
        "target": 6,
        "optimal_distance": 15,      # null when unreachable
        "optimal_path": [0, 4, 6],
    }
"""

import logging
from dataclasses import dataclass
from typing import Any

from pathpuzzle.constants import StorageConfig
from pathpuzzle.model.puzzle_graph import PuzzleGraph
from pathpuzzle.model.solution import Solution

logger = logging.getLogger(__name__)


@dataclass
class Level:
    """A playable puzzle instance.

    Attributes:
        number: Level (difficulty) number, starting at 1
        graph: The puzzle graph
        source_id: Start node ("S" on the board)
        target_id: Goal node ("G" on the board)
        solution: Optimal distance and path from source to target
    """

    number: int
    graph: PuzzleGraph
    source_id: int
    target_id: int
    solution: Solution

    @property
    def optimal_distance(self) -> float:
        return self.solution.distance

    @property
    def optimal_path(self) -> tuple[int, ...]:
        return self.solution.path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted-state record."""
        solution = self.solution.to_dict()
        graph = self.graph.to_dict()
        return {
            "version": StorageConfig.RECORD_VERSION,
            "level": self.number,
            "nodes": graph["nodes"],
            "edges": graph["edges"],
            "source": self.source_id,
            "target": self.target_id,
            "optimal_distance": solution["distance"],
            "optimal_path": solution["path"],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Level":
        """Rebuild a Level from a record without rerunning generation or search.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the node list is not dense, an edge is invalid, or
                source, target and cached solution do not fit the graph.
        """
        graph = PuzzleGraph.from_dict(data={"nodes": data["nodes"], "edges": data["edges"]})
        solution = Solution.from_dict(data={"distance": data["optimal_distance"], "path": data["optimal_path"]})
        level = cls(
            number=int(data["level"]),
            graph=graph,
            source_id=int(data["source"]),
            target_id=int(data["target"]),
            solution=solution,
        )
        level.validate()
        logger.debug(f"Rebuilt level {level.number} from record: {graph}")
        return level

    def validate(self) -> None:
        """Check that source, target and the cached solution belong to the graph.

        An unreachable solution must have an empty path. A reachable one must
        run from source to target over existing edges and its distance must
        equal the summed edge weights.

        Raises:
            ValueError: On the first inconsistency found.
        """
        if self.number < 1:
            raise ValueError(f"Level number must be >= 1, got {self.number}")
        for name, node_id in (("source", self.source_id), ("target", self.target_id)):
            if not self.graph.has_node(node_id=node_id):
                raise ValueError(f"Level {name} {node_id} is not a node of the graph")

        distance = self.solution.distance
        path = self.solution.path
        if isinstance(distance, bool) or not isinstance(distance, (int, float)):
            raise ValueError(f"Optimal distance must be a number, got {distance!r}")

        if not self.solution.is_reachable:
            if path:
                raise ValueError(f"Unreachable level must have an empty optimal path, got {list(path)}")
            return

        if not path or path[0] != self.source_id or path[-1] != self.target_id:
            raise ValueError(f"Optimal path {list(path)} does not run from {self.source_id} to {self.target_id}")
        for node_id in path:
            if not self.graph.has_node(node_id=node_id):
                raise ValueError(f"Optimal path visits unknown node {node_id}")
        cost = self.graph.path_cost(path=path)
        if cost != distance:
            raise ValueError(f"Optimal distance {distance} does not match path cost {cost}")

    def __repr__(self) -> str:
        return (
            f"Level({self.number}, {self.graph}, source={self.source_id}, target={self.target_id}, "
            f"optimal={self.optimal_distance})"
        )


def level_to_record(level: Level) -> dict[str, Any]:
    """Save half of the explicit save/load interface."""
    return level.to_dict()


def level_from_record(data: dict[str, Any]) -> Level:
    """Load half of the explicit save/load interface."""
    return Level.from_dict(data=data)
