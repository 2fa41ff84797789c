"""PriorityQueue - Sorted-list priority queue for the shortest-path search.

Entries stay sorted ascending by priority. Insertion is O(n) which is fine
for puzzle graphs (at most 26 nodes); a heap would only change performance.

The queue does not deduplicate elements: the same node may be queued several
times with different priorities. Consumers must tolerate stale entries.
"""

from bisect import insort_right
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class QueueEntry(Generic[T]):
    """An element together with its priority.

    Attributes:
        element: Queued item (a node ID during the search)
        priority: Sort key, lowest comes out first
    """

    element: T
    priority: float


class PriorityQueue(Generic[T]):
    """Min-priority queue with stable ordering for equal priorities.

    Example:
        pq = PriorityQueue()
        pq.enqueue(element=3, priority=5)
        pq.enqueue(element=1, priority=2)
        pq.dequeue()  # QueueEntry(element=1, priority=2)
    """

    def __init__(self) -> None:
        self._items: list[QueueEntry[T]] = []

    def enqueue(self, element: T, priority: float) -> None:
        """Insert element before the first entry with a strictly greater priority.

        Entries with an equal priority keep insertion order (new one goes after them).
        """
        insort_right(self._items, QueueEntry(element=element, priority=priority), key=lambda e: e.priority)

    def dequeue(self) -> Optional[QueueEntry[T]]:
        """Remove and return the lowest-priority entry.

        Returns:
            The entry, or None if the queue is empty.
        """
        if not self._items:
            return None
        return self._items.pop(0)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"PriorityQueue({[(e.element, e.priority) for e in self._items]})"
