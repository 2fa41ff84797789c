"""Level Generator - Builds solvable puzzle graphs for a difficulty level.

Algorithm:
1. Place N nodes on a jittered grid and shuffle them (N grows with level, max 26)
2. Wire every node to its 2 nearest neighbours (scipy cKDTree), with weights
   derived from distance plus a small random bonus. Above level 1 a direct
   source-target edge is never created.
3. Solve source (node 0) -> target (node N-1) with Dijkstra
4. Accept if the target is reachable and the optimal path visits enough
   nodes for the level; otherwise throw the graph away and start over

The retry loop is bounded by GenerationConfig.MAX_ATTEMPTS. Running out of
attempts means the level parameters cannot be satisfied and raises
GenerationError.

Randomness comes from an injectable zero-argument callable returning floats
in [0, 1), so a seeded source reproduces the exact same level.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.spatial import cKDTree

from pathpuzzle.constants import GenerationConfig, LayoutConfig, LevelConfig, WeightConfig
from pathpuzzle.core.geometry import PlaneCalculator
from pathpuzzle.generators.layout import GridLayout, RandomSource
from pathpuzzle.model.level import Level
from pathpuzzle.model.puzzle_graph import PuzzleGraph
from pathpuzzle.model.solution import Solution

logger = logging.getLogger(__name__)

SOURCE_NODE_ID = 0


class GenerationError(RuntimeError):
    """Raised when no acceptable graph was found within the attempt ceiling."""


@dataclass(frozen=True)
class LevelParameters:
    """Difficulty-derived generation parameters.

    Attributes:
        level: Level number (1 = easiest)
        node_count: Number of nodes to place
        min_path_nodes: Minimum optimal path length in nodes (source and target included)
        allow_direct_edge: Whether source and target may be neighbours
    """

    level: int
    node_count: int
    min_path_nodes: int
    allow_direct_edge: bool

    @property
    def source_id(self) -> int:
        return SOURCE_NODE_ID

    @property
    def target_id(self) -> int:
        return self.node_count - 1

    @classmethod
    def for_level(cls, level: int) -> "LevelParameters":
        """Derive parameters from the level number.

        Raises:
            ValueError: If level is below LevelConfig.FIRST_LEVEL.
        """
        if level < LevelConfig.FIRST_LEVEL:
            raise ValueError(f"Level must be >= {LevelConfig.FIRST_LEVEL}, got {level}")

        node_count = min(
            LevelConfig.MAX_NODES,
            LevelConfig.BASE_NODES + int(level * LevelConfig.NODES_PER_LEVEL),
        )
        min_path_nodes = min(
            node_count - 1,
            LevelConfig.MIN_PATH_BASE + level // LevelConfig.MIN_PATH_LEVEL_STEP,
        )
        return cls(
            level=level,
            node_count=node_count,
            min_path_nodes=min_path_nodes,
            allow_direct_edge=level <= LevelConfig.DIRECT_EDGE_MAX_LEVEL,
        )

    def accepts(self, solution: Solution) -> bool:
        """True if the solution is reachable and long enough for this level."""
        return solution.is_reachable and len(solution.path) >= self.min_path_nodes


class LevelGenerator:
    """Generates validated puzzle levels.

    Example:
        generator = LevelGenerator.seeded(seed=42)
        level = generator.generate(level=5)
        level.optimal_path  # cached, never recomputed
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        max_attempts: int = GenerationConfig.MAX_ATTEMPTS,
    ) -> None:
        """Initialize the generator.

        Args:
            random_source: Callable returning uniform floats in [0, 1).
                Defaults to the module-level random.random.
            max_attempts: Candidate graphs to try before giving up.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")

        self.random_source = random_source or random.random
        self.max_attempts = max_attempts
        self.layout = GridLayout(random_source=self.random_source)

    @classmethod
    def seeded(cls, seed: int, max_attempts: int = GenerationConfig.MAX_ATTEMPTS) -> "LevelGenerator":
        """Deterministic generator backed by random.Random(seed)."""
        return cls(random_source=random.Random(seed).random, max_attempts=max_attempts)

    def generate(self, level: int) -> Level:
        """Build a solvable level.

        Args:
            level: Difficulty level (>= 1)

        Returns:
            Level with the graph and the cached optimal solution.

        Raises:
            ValueError: If level is below 1.
            GenerationError: If no candidate was accepted within max_attempts.
        """
        params = LevelParameters.for_level(level=level)

        for attempt in range(1, self.max_attempts + 1):
            graph = self.build_candidate(params=params)
            solution = graph.dijkstra(start_id=params.source_id, end_id=params.target_id)

            if params.accepts(solution=solution):
                logger.info(
                    f"Level {level} generated after {attempt} attempt(s): "
                    f"{graph.node_count} nodes, {graph.edge_count} edges, "
                    f"optimal distance {solution.distance} via {list(solution.path)}"
                )
                return Level(
                    number=level,
                    graph=graph,
                    source_id=params.source_id,
                    target_id=params.target_id,
                    solution=solution,
                )

            logger.debug(
                f"Level {level} attempt {attempt} rejected: distance={solution.distance}, "
                f"path length {len(solution.path)} < {params.min_path_nodes}"
            )

        raise GenerationError(
            f"No acceptable graph for level {level} after {self.max_attempts} attempts "
            f"(node_count={params.node_count}, min_path_nodes={params.min_path_nodes})"
        )

    def build_candidate(self, params: LevelParameters) -> PuzzleGraph:
        """Build one candidate graph (not yet validated)."""
        positions = self.layout.place(node_count=params.node_count)

        graph = PuzzleGraph()
        for node_id, (x, y) in enumerate(positions):
            graph.add_node(
                node_id=node_id,
                x=float(x),
                y=float(y),
                label=chr(ord(LayoutConfig.LABEL_START) + node_id),
            )

        self._connect_nearest(graph=graph, positions=positions, params=params)
        return graph

    def _connect_nearest(self, graph: PuzzleGraph, positions: np.ndarray, params: LevelParameters) -> None:
        """Connect every node to its nearest neighbours.

        All distances are queried and sorted by (distance, node ID), so equally
        close nodes are taken in ID order. A skipped source-target pair is not
        replaced by the next-nearest node.
        """
        tree = cKDTree(positions)
        distances, indices = tree.query(positions, k=params.node_count)
        distances = np.atleast_2d(distances)
        indices = np.atleast_2d(indices)

        for node_id in range(params.node_count):
            ranked = sorted(
                (float(d), int(j)) for d, j in zip(distances[node_id], indices[node_id]) if j != node_id
            )
            nearest = [j for _, j in ranked[: LevelConfig.NEAREST_NEIGHBORS]]
            for neighbor_id in nearest:
                if not params.allow_direct_edge and self._is_source_target_pair(
                    a=node_id, b=neighbor_id, params=params
                ):
                    continue
                graph.add_edge(
                    from_id=node_id,
                    to_id=neighbor_id,
                    weight=self._edge_weight(graph=graph, a=node_id, b=neighbor_id),
                )

    def _edge_weight(self, graph: PuzzleGraph, a: int, b: int) -> int:
        """round(distance / scale) plus a random bonus in [MIN_JITTER, MIN_JITTER + JITTER_RANGE)."""
        distance = graph.nodes[a].distance_to(graph.nodes[b])
        jitter = PlaneCalculator.random_index(u=self.random_source(), size=WeightConfig.JITTER_RANGE)
        return PlaneCalculator.round_half_up(distance / WeightConfig.DISTANCE_SCALE) + jitter + WeightConfig.MIN_JITTER

    @staticmethod
    def _is_source_target_pair(a: int, b: int, params: LevelParameters) -> bool:
        return {a, b} == {params.source_id, params.target_id}
