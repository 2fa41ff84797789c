"""Core building blocks for the shortest-path engine.

- PriorityQueue: Sorted-list min-priority queue used by Dijkstra
- QueueEntry: (element, priority) record yielded by the queue
- PlaneCalculator: Board-space distance and rounding helpers
"""

from pathpuzzle.core.geometry import PlaneCalculator
from pathpuzzle.core.priority_queue import PriorityQueue, QueueEntry

__all__ = [
    "PriorityQueue",
    "QueueEntry",
    "PlaneCalculator",
]
