"""
Max-first priority collection used by the partition engine.
"""

import heapq
import itertools
from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

T = TypeVar('T')


def by_variance(entry) -> int:
    """Default ordering key: the entry's variance score."""
    return entry.variance


class PartitionQueue(Generic[T]):
    """
    Priority collection that always yields the entry with the largest key.

    Ordering depends on the key alone. Among entries with equal keys the
    removal order is unspecified; callers must not rely on insertion order
    or on region coordinates to break ties. The running counter stored in
    each heap slot only keeps heapq from comparing the entries themselves.
    """

    def __init__(self, key: Callable[[T], int] = by_variance):
        self._key = key
        self._heap: List[Tuple[int, int, T]] = []
        self._counter = itertools.count()

    def push(self, entry: T) -> None:
        # heapq is a min-heap, so store the negated key
        heapq.heappush(self._heap, (-self._key(entry), next(self._counter), entry))

    def pop_max(self) -> T:
        """Remove and return the entry with the largest key."""
        if not self._heap:
            raise IndexError("pop_max from an empty PartitionQueue")
        return heapq.heappop(self._heap)[2]

    def peek_max(self) -> T:
        """Return the entry with the largest key without removing it."""
        if not self._heap:
            raise IndexError("peek_max on an empty PartitionQueue")
        return self._heap[0][2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[T]:
        """Iterate over all entries in no particular order."""
        return (slot[2] for slot in self._heap)
