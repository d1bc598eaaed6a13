"""
LIFO frontier of pixel coordinates pending neighbour expansion.

Growth is depth-first: the most recently admitted pixel is expanded next.
The adaptive threshold depends on this visiting order.
"""

from typing import List

from .grid import Coord


class Frontier:
    def __init__(self):
        self._items: List[Coord] = []

    def push(self, x: int, y: int) -> None:
        self._items.append((x, y))

    def pop(self) -> Coord:
        """Remove and return the most recently pushed coordinate."""
        if not self._items:
            raise IndexError("pop from an empty frontier")
        return self._items.pop()

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
