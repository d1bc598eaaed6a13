"""
Similarity policies deciding whether a neighbour joins the growing region.

Two rules are provided:

- ``FixedThreshold``: Euclidean color distance to the pixel the region
  started from must stay below ``threshold``.
- ``AdaptiveThreshold``: Euclidean color distance to the pixel being expanded
  must stay below a running bound. The bound is the mean brightness of every
  pixel admitted so far, floored at ``threshold``. The distance is a color
  vector norm while the bound is a scalar brightness; both are kept as is.
"""

import math
from typing import List, Sequence


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean norm of the channel-wise difference of two 3-channel samples."""
    d0 = a[0] - b[0]
    d1 = a[1] - b[1]
    d2 = a[2] - b[2]
    return math.sqrt(d0 * d0 + d1 * d1 + d2 * d2)


def brightness(sample: Sequence[float]) -> float:
    """Mean of the 3 channels."""
    return (sample[0] + sample[1] + sample[2]) / 3.0


class FixedThreshold:
    """Compare every candidate to the seed pixel of the current region."""

    def __init__(self, threshold: float):
        self.floor = float(threshold)
        self.threshold = self.floor
        self.reference = None

    def begin(self, seed_sample: Sequence[float]) -> None:
        self.reference = tuple(seed_sample)

    def accepts(self, candidate: Sequence[float], current: Sequence[float]) -> bool:
        # `current` is irrelevant here, distances are always taken to the seed
        return color_distance(candidate, self.reference) < self.threshold

    def admit(self, candidate: Sequence[float]) -> None:
        pass


class AdaptiveThreshold:
    """
    Compare each candidate to the pixel being expanded, against a bound that
    tracks the running mean brightness of the region.

    The accumulator starts with the seed's brightness and the bound starts at
    ``threshold``. Each admission appends the candidate's brightness and sets
    the bound to ``max(mean(accumulator), threshold)``, so it never drops
    below the configured floor.
    """

    def __init__(self, threshold: float):
        self.floor = float(threshold)
        self.threshold = self.floor
        self.values: List[float] = []
        self._total = 0.0

    def begin(self, seed_sample: Sequence[float]) -> None:
        seed_value = brightness(seed_sample)
        self.values = [seed_value]
        self._total = seed_value
        self.threshold = self.floor

    def accepts(self, candidate: Sequence[float], current: Sequence[float]) -> bool:
        return color_distance(candidate, current) < self.threshold

    def admit(self, candidate: Sequence[float]) -> None:
        value = brightness(candidate)
        self.values.append(value)
        self._total += value
        self.threshold = max(self._total / len(self.values), self.floor)


def make_policy(threshold: float, adaptive: bool = False):
    """Return the policy instance for the requested mode."""
    return AdaptiveThreshold(threshold) if adaptive else FixedThreshold(threshold)
