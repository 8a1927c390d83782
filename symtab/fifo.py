"""
FIFO queue used for breadth-first walks over the tree.

Nodes are enqueued at the back and dequeued from the front.
"""

from collections import deque
from typing import Any

from symtab.errors import EmptyStructureError


# ------------------ Queue ------------------
class Queue:
    def __init__(self):
        self._items = deque()

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def enqueue(self, item: Any) -> None:
        self._items.append(item)

    def dequeue(self) -> Any:
        """Remove and return the item at the front of the queue."""
        if self.is_empty():
            raise EmptyStructureError("Empty queue")
        return self._items.popleft()
