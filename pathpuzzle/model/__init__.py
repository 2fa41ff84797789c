"""Data model classes for the puzzle graph.

- Node: Labelled point with a board position
- Edge: Undirected weighted connection (one per node pair)
- Neighbor: Adjacency-list entry (neighbour ID + weight)
- Solution: Shortest-path query result (distance + path)
- PuzzleGraph: Nodes, edges, adjacency and the Dijkstra query
- Level: Validated graph + source/target + cached optimal solution
"""

from pathpuzzle.model.edge import Edge, Neighbor
from pathpuzzle.model.level import Level, level_from_record, level_to_record
from pathpuzzle.model.node import Node
from pathpuzzle.model.puzzle_graph import PuzzleGraph, UnknownNodeError
from pathpuzzle.model.solution import Solution

__all__ = [
    "Node",
    "Edge",
    "Neighbor",
    "Solution",
    "PuzzleGraph",
    "UnknownNodeError",
    "Level",
    "level_to_record",
    "level_from_record",
]
