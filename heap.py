"""
Array-backed binary heap used as the priority queue for Huffman tree construction.

Keys are ordered by a three-way comparator supplied by the caller:
comparator(x, y) < 0 means x has strictly higher priority (comes out first).
Duplicate priorities are allowed.

Examples of comparators:
    lambda s, t: (s > t) - (s < t)          # smallest string first
    lambda s, t: len(t) - len(s)            # longest string first
"""

from typing import Any, Callable, List

Comparator = Callable[[Any, Any], int]


class EmptyQueueError(IndexError):
    pass


class Heap:
    def __init__(self, comparator: Comparator):
        self.keys: List[Any] = []
        self._comparator = comparator

    def comparator(self) -> Comparator:
        return self._comparator

    def peek(self):
        """Return the highest priority key without removing it."""
        if not self.keys:
            raise EmptyQueueError("peek from an empty heap")
        return self.keys[0]

    def insert(self, key) -> None:
        self.keys.append(key)
        self.sift_up(len(self.keys) - 1)

    def delete(self):
        """Remove and return the highest priority key."""
        if not self.keys:
            raise EmptyQueueError("delete from an empty heap")
        highest = self.keys[0]
        last = self.keys.pop()
        if self.keys:
            self.keys[0] = last
            self.sift_down(0)
        return highest

    def sift_down(self, p: int) -> None:
        parent = p
        child = get_left(parent)
        n = len(self.keys)

        while child < n:
            # right child wins only if strictly smaller, ties stay left
            if child + 1 < n and self._comparator(self.keys[child + 1], self.keys[child]) < 0:
                child += 1
            if self._comparator(self.keys[child], self.keys[parent]) >= 0:
                break
            self.swap(child, parent)
            parent = child
            child = get_left(parent)

    def sift_up(self, q: int) -> None:
        child = q
        while child > 0:
            parent = get_parent(child)
            if self._comparator(self.keys[child], self.keys[parent]) >= 0:
                break
            self.swap(parent, child)
            child = parent

    def swap(self, i: int, j: int) -> None:
        self.keys[i], self.keys[j] = self.keys[j], self.keys[i]

    def size(self) -> int:
        return len(self.keys)

    def is_empty(self) -> bool:
        return not self.keys

    def __len__(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        return f"Heap({self.keys!r})"


def get_left(p: int) -> int:
    return 2 * p + 1


def get_right(p: int) -> int:
    return 2 * p + 2


def get_parent(p: int) -> int:
    return (p - 1) // 2
