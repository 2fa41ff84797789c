"""Shared pytest fixtures for pathpuzzle tests.

Provides small hand-built graphs with known shortest paths. Node positions
are placed on a line (x = 100 * id) since positions do not affect the
shortest-path query.
"""

import pytest

from pathpuzzle.model.puzzle_graph import PuzzleGraph


def build_graph(node_count: int, edges: list[tuple[int, int, int]]) -> PuzzleGraph:
    """Create a graph with dense nodes 0..node_count-1 and the given (from, to, weight) edges."""
    graph = PuzzleGraph()
    for node_id in range(node_count):
        graph.add_node(node_id=node_id, x=100.0 * node_id, y=0.0, label=chr(ord("A") + node_id))
    for from_id, to_id, weight in edges:
        graph.add_edge(from_id=from_id, to_id=to_id, weight=weight)
    return graph


@pytest.fixture
def empty_graph() -> PuzzleGraph:
    return PuzzleGraph()


@pytest.fixture
def triangle_graph() -> PuzzleGraph:
    """Triangle where the two-hop route (4 + 1) beats the direct edge (10)."""
    return build_graph(node_count=3, edges=[(0, 1, 4), (1, 2, 1), (0, 2, 10)])


@pytest.fixture
def chain_graph() -> PuzzleGraph:
    """Linear chain 0-1-2-3, every edge weight 1."""
    return build_graph(node_count=4, edges=[(0, 1, 1), (1, 2, 1), (2, 3, 1)])


@pytest.fixture
def disjoint_graph() -> PuzzleGraph:
    """Two components {0, 1} and {2, 3} with no edge between them."""
    return build_graph(node_count=4, edges=[(0, 1, 3), (2, 3, 3)])


@pytest.fixture
def make_graph():
    """Factory fixture exposing build_graph to tests."""
    return build_graph
