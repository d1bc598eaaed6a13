"""Shared test fixtures."""

import numpy as np
import pytest


def solid(height, width, color=(100, 100, 100)):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


@pytest.fixture
def uniform_4x4():
    return solid(4, 4)


@pytest.fixture
def halves_4x4():
    # rows 0-1 and rows 2-3, Euclidean distance 200 apart
    img = solid(4, 4, (10, 10, 10))
    img[2:, :] = (210, 10, 10)
    return img


@pytest.fixture
def gradient_row():
    # 1 x 10, red channel stepping by 4
    img = np.zeros((1, 10, 3), dtype=np.uint8)
    img[0, :, 0] = np.arange(0, 40, 4)
    return img


@pytest.fixture
def island_on_black():
    # 3 x 3 bright island in a 12 x 12 black image
    img = np.zeros((12, 12, 3), dtype=np.uint8)
    img[4:7, 4:7] = (200, 200, 200)
    return img
