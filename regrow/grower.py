"""
Seeded region growing over a PixelGrid.

Two modes are supported:

- exhaustive: every pixel, in row-major order, seeds a new region if it is
  still unlabeled. Every region is committed, so every pixel ends up labeled.
- interactive: regions grow only from caller-supplied seeds (each expanded
  with its 8-neighbours). Black pixels are never used as seeds, regions
  smaller than ``min_region_area`` are reclaimed and retried one pixel up
  and to the left, and the run stops early once the iteration cap is
  exceeded or every pixel is labeled.
"""

import logging
import math
from collections import deque
from typing import Iterable, List, NamedTuple, Optional

import numpy as np

from .frontier import Frontier
from .grid import Coord, LabelMap, PixelGrid, neighbours
from .similarity import make_policy

logger = logging.getLogger(__name__)

MIN_REGION_AREA = 8 * 8
RETRY_OFFSET = (-1, -1)
MAX_ITERATIONS = 200000


class SegmentationResult(NamedTuple):
    labels: np.ndarray
    regions: int
    iterations: int
    reclaimed: int
    complete: bool
    capped: bool


def validate_threshold(threshold: float) -> float:
    try:
        value = float(threshold)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Threshold must be a real number, got {threshold!r}") from e
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Threshold must be finite and non-negative, got {threshold!r}")
    return value


def expand_seeds(seeds: Iterable[Coord], height: int, width: int) -> List[Coord]:
    """Follow each seed by its in-bounds 8-neighbours, keeping duplicates."""
    expanded = []
    for x, y in seeds:
        expanded.append((x, y))
        expanded.extend(neighbours(x, y, height, width))
    return expanded


class RegionGrower:
    """
    Label a PixelGrid by growing regions from seeds.

    Parameters:
    ----------
    grid : PixelGrid
        Image to segment. Not modified.

    threshold : float
        Similarity bound (fixed mode) or its floor (adaptive mode).

    adaptive : bool, optional
        Use the adaptive running-mean bound instead of the fixed one.
        Default: False

    iteration_cap : int, optional
        Interactive runs stop once more pixels than this have been expanded.
        Default: MAX_ITERATIONS

    min_region_area : int, optional
        Interactive regions smaller than this are reclaimed.
        Default: MIN_REGION_AREA
    """

    def __init__(self, grid: PixelGrid, threshold: float, adaptive: bool = False,
                 iteration_cap: int = MAX_ITERATIONS, min_region_area: int = MIN_REGION_AREA):
        if grid.height == 0 or grid.width == 0:
            raise ValueError(f"Cannot segment an empty image of shape {grid.shape}")
        if iteration_cap < 0:
            raise ValueError(f"iteration_cap must be non-negative, got {iteration_cap}")
        if min_region_area < 0:
            raise ValueError(f"min_region_area must be non-negative, got {min_region_area}")

        self.grid = grid
        self.threshold = validate_threshold(threshold)
        self.policy = make_policy(self.threshold, adaptive)
        self.iteration_cap = int(iteration_cap)
        self.min_region_area = int(min_region_area)
        self.labels = LabelMap(grid.height, grid.width)
        self.frontier = Frontier()
        self.current_region = 0
        self.iterations = 0
        self.reclaimed = 0

    def reset(self) -> None:
        self.labels = LabelMap(self.grid.height, self.grid.width)
        self.frontier.clear()
        self.current_region = 0
        self.iterations = 0
        self.reclaimed = 0

    def check_seeds(self, seeds: Iterable) -> List[Coord]:
        checked = []
        for seed in seeds:
            try:
                x, y = seed
                x, y = int(x), int(y)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Seed must be an (x, y) pair, got {seed!r}") from e
            if not self.grid.contains(x, y):
                raise ValueError(f"Seed {(x, y)} is outside the image of shape {self.grid.shape}")
            checked.append((x, y))
        return checked

    def passed_all(self) -> bool:
        return self.iterations > self.iteration_cap or self.labels.is_complete()

    def run(self, seeds: Optional[Iterable[Coord]] = None) -> SegmentationResult:
        """Segment the grid, exhaustively when ``seeds`` is None."""
        self.reset()
        capped = False
        if seeds is None:
            self._run_exhaustive()
        else:
            capped = self._run_interactive(self.check_seeds(seeds))

        return SegmentationResult(
            labels=self.labels.to_array(),
            regions=self.current_region,
            iterations=self.iterations,
            reclaimed=self.reclaimed,
            complete=self.labels.is_complete(),
            capped=capped,
        )

    def _run_exhaustive(self) -> None:
        for x0 in range(self.grid.height):
            for y0 in range(self.grid.width):
                if self.labels.get(x0, y0) == 0:
                    self._start_region(x0, y0)
                    self._grow(bounded=False)

    def _run_interactive(self, seeds: List[Coord]) -> bool:
        pending = deque(expand_seeds(seeds, self.grid.height, self.grid.width))
        while pending:
            x0, y0 = pending.popleft()
            if self.labels.get(x0, y0) != 0 or not self._present(x0, y0):
                continue

            self._start_region(x0, y0)
            self._grow(bounded=True)

            if self.passed_all():
                capped = self.iterations > self.iteration_cap
                if capped:
                    logger.warning(f"Iteration cap {self.iteration_cap} reached, "
                                   f"{self.labels.count_labeled()}/{self.labels.size} pixels labeled")
                return capped

            size = self.labels.count_of_label(self.current_region)
            if size < self.min_region_area:
                self._reclaim(size)
                rx, ry = x0 + RETRY_OFFSET[0], y0 + RETRY_OFFSET[1]
                if self.grid.contains(rx, ry):
                    pending.appendleft((rx, ry))
            else:
                logger.debug(f"Region {self.current_region} committed from {(x0, y0)}, {size} px")
        return False

    def _present(self, x: int, y: int) -> bool:
        return any(c != 0 for c in self.grid.sample(x, y))

    def _start_region(self, x0: int, y0: int) -> None:
        self.current_region += 1
        self.labels.set(x0, y0, self.current_region)
        self.frontier.clear()
        self.frontier.push(x0, y0)
        self.policy.begin(self.grid.sample(x0, y0))

    def _grow(self, bounded: bool) -> None:
        """
        Drain the frontier, labeling accepted neighbours with the current region.

        When ``bounded``, growth is abandoned as soon as an accepted neighbour is
        found while the termination predicate holds.
        """
        grid, labels, policy, frontier = self.grid, self.labels, self.policy, self.frontier
        height, width = grid.height, grid.width
        region = self.current_region

        while not frontier.is_empty():
            x, y = frontier.pop()
            current = grid.sample(x, y)
            for nx, ny in neighbours(x, y, height, width):
                if labels.get(nx, ny) != 0:
                    continue
                candidate = grid.sample(nx, ny)
                if not policy.accepts(candidate, current):
                    continue
                if bounded and self.passed_all():
                    self.iterations += 1
                    frontier.clear()
                    return
                labels.set(nx, ny, region)
                frontier.push(nx, ny)
                policy.admit(candidate)
            # counted once the pixel's neighbours have been scanned
            self.iterations += 1

    def _reclaim(self, size: int) -> None:
        logger.debug(f"Region {self.current_region} reclaimed, {size} px < {self.min_region_area}")
        self.labels.clear_region(self.current_region)
        self.current_region -= 1
        self.reclaimed += 1
