from __future__ import annotations
import heapq
from typing import List, Tuple
from .models import LargeFile

class TopFiles:
    """Keeps the `limit` largest files strictly above `floor` bytes.

    Min-heap keyed by (size, path): the smallest kept file sits at the top and
    is evicted when a larger candidate arrives, so memory stays O(limit) no
    matter how many candidates are offered. Not thread-safe on its own; the
    scanner guards it with the aggregation lock.
    """

    def __init__(self, limit: int, floor: int = 0):
        self.limit = limit
        self.floor = floor
        self._heap: List[Tuple[int, str, LargeFile]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, item: LargeFile) -> bool:
        if self.limit <= 0 or item.size <= self.floor:
            return False
        key = (item.size, item.path, item)
        if len(self._heap) < self.limit:
            heapq.heappush(self._heap, key)
            return True
        # ties on size keep the lexicographically larger path, so results do
        # not depend on the order candidates arrive in
        if (item.size, item.path) > self._heap[0][:2]:
            heapq.heapreplace(self._heap, key)
            return True
        return False

    def sorted(self) -> List[LargeFile]:
        items = [entry[2] for entry in self._heap]
        items.sort(key=lambda f: (-f.size, f.path))
        return items
