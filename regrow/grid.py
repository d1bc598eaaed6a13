"""
Pixel and label grids shared by the region-growing engine.

Coordinates follow the image array: ``x`` is the row in ``[0, height)`` and
``y`` the column in ``[0, width)``.
"""

from typing import Iterator, Tuple

import numpy as np

Coord = Tuple[int, int]

# 8-connectivity, scanned row offset first
NEIGHBOUR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


def in_bounds(x: int, y: int, height: int, width: int) -> bool:
    return 0 <= x < height and 0 <= y < width


def neighbours(x: int, y: int, height: int, width: int) -> Iterator[Coord]:
    """Yield the in-bounds 8-neighbours of (x, y) in scan order."""
    for dx, dy in NEIGHBOUR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < height and 0 <= ny < width:
            yield nx, ny


class PixelGrid:
    """
    Read-only view over an H x W x 3 array of color samples.

    Parameters:
    ----------
    data : np.ndarray
        Image as an array of shape [height, width, 3]. Integer or float
        channels are accepted; the grower treats the 3 channels symmetrically.
    """

    def __init__(self, data: np.ndarray):
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"PixelGrid expects an array of shape [H, W, 3], got {arr.shape}")
        self.height, self.width = int(arr.shape[0]), int(arr.shape[1])
        # nested lists of Python scalars for per-pixel reads
        self._rows = arr.tolist()

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def sample(self, x: int, y: int) -> Tuple[float, float, float]:
        c0, c1, c2 = self._rows[x][y]
        return c0, c1, c2

    def contains(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.height, self.width)


class LabelMap:
    """
    Mutable grid of region ids, 0 meaning unassigned.

    The number of labeled cells is tracked incrementally so the termination
    check does not rescan the grid after every admission.
    """

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        self._labels = np.zeros((height, width), dtype=np.int32)
        self._labeled = 0

    def get(self, x: int, y: int) -> int:
        return int(self._labels[x, y])

    def set(self, x: int, y: int, label: int) -> None:
        previous = self._labels[x, y]
        if previous == 0 and label != 0:
            self._labeled += 1
        elif previous != 0 and label == 0:
            self._labeled -= 1
        self._labels[x, y] = label

    def clear_region(self, label: int) -> int:
        """Reset every cell carrying ``label`` to 0 and return how many were cleared."""
        mask = self._labels == label
        cleared = int(np.count_nonzero(mask))
        self._labels[mask] = 0
        self._labeled -= cleared
        return cleared

    def count_labeled(self) -> int:
        return self._labeled

    def count_of_label(self, label: int) -> int:
        return int(np.count_nonzero(self._labels == label))

    @property
    def size(self) -> int:
        return self.height * self.width

    def is_complete(self) -> bool:
        return self._labeled == self.size

    def to_array(self) -> np.ndarray:
        return self._labels.copy()
