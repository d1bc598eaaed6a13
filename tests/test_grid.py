"""Tests for PixelGrid, LabelMap and the neighbourhood helpers."""

import numpy as np
import pytest

from regrow.grid import LabelMap, PixelGrid, in_bounds, neighbours


def test_in_bounds():
    assert in_bounds(0, 0, 3, 5)
    assert in_bounds(2, 4, 3, 5)
    assert not in_bounds(3, 0, 3, 5)
    assert not in_bounds(0, 5, 3, 5)
    assert not in_bounds(-1, 2, 3, 5)


def test_neighbours_interior_order():
    assert list(neighbours(1, 1, 3, 3)) == [
        (0, 0), (0, 1), (0, 2),
        (1, 0), (1, 2),
        (2, 0), (2, 1), (2, 2),
    ]


def test_neighbours_corner_stays_in_bounds():
    assert list(neighbours(0, 0, 4, 4)) == [(0, 1), (1, 0), (1, 1)]
    assert list(neighbours(3, 3, 4, 4)) == [(2, 2), (2, 3), (3, 2)]


def test_pixel_grid_sample():
    data = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
    grid = PixelGrid(data)
    assert grid.shape == (2, 3)
    assert grid.sample(1, 2) == (15, 16, 17)
    assert grid.contains(1, 2)
    assert not grid.contains(2, 0)


def test_pixel_grid_samples_do_not_wrap():
    grid = PixelGrid(np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.uint8))
    a, b = grid.sample(0, 0), grid.sample(0, 1)
    assert a[0] - b[0] == -255


def test_pixel_grid_rejects_wrong_shape():
    with pytest.raises(ValueError):
        PixelGrid(np.zeros((4, 4)))


def test_label_map_counts():
    labels = LabelMap(3, 3)
    assert labels.count_labeled() == 0
    labels.set(0, 0, 1)
    labels.set(0, 1, 1)
    labels.set(2, 2, 2)
    assert labels.get(0, 1) == 1
    assert labels.count_labeled() == 3
    assert labels.count_of_label(1) == 2
    assert labels.count_of_label(2) == 1
    assert not labels.is_complete()


def test_label_map_relabel_keeps_count():
    labels = LabelMap(2, 2)
    labels.set(0, 0, 1)
    labels.set(0, 0, 2)
    assert labels.count_labeled() == 1
    labels.set(0, 0, 0)
    assert labels.count_labeled() == 0


def test_clear_region_resets_whole_region():
    labels = LabelMap(2, 2)
    labels.set(0, 0, 1)
    labels.set(1, 1, 1)
    labels.set(0, 1, 2)
    assert labels.clear_region(1) == 2
    assert labels.count_labeled() == 1
    arr = labels.to_array()
    assert arr.tolist() == [[0, 2], [0, 0]]


def test_complete_when_all_labeled():
    labels = LabelMap(1, 2)
    labels.set(0, 0, 1)
    labels.set(0, 1, 1)
    assert labels.is_complete()
