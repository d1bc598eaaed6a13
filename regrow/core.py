"""
Core functionality for seeded region-growing segmentation.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image

from .grid import PixelGrid
from .grower import MAX_ITERATIONS, RegionGrower, SegmentationResult

Seeds = Optional[Iterable[Tuple[int, int]]]


def as_pixel_grid(image: np.ndarray) -> PixelGrid:
    """Validate an image array and wrap it in a PixelGrid."""
    arr = np.asarray(image)
    if arr.ndim == 2:
        arr = np.repeat(arr[:, :, None], 3, axis=2)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"Image must have shape [H, W] or [H, W, 3], got {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"Image must be non-empty, got shape {arr.shape}")
    if arr.dtype == np.bool_:
        arr = arr.astype(np.uint8)
    return PixelGrid(np.ascontiguousarray(arr))


def segment(image: np.ndarray, threshold: float, seeds: Seeds = None,
            adaptive: Optional[bool] = None, iteration_cap: int = MAX_ITERATIONS) -> SegmentationResult:
    """
    Run region growing and return the labels along with run statistics.

    See ``segment_image`` for the parameters.
    """
    if adaptive is None:
        adaptive = seeds is not None
    grower = RegionGrower(as_pixel_grid(image), threshold, adaptive=adaptive, iteration_cap=iteration_cap)
    return grower.run(seeds)


def segment_image(image: np.ndarray, threshold: float, seeds: Seeds = None,
                  adaptive: Optional[bool] = None, iteration_cap: int = MAX_ITERATIONS) -> np.ndarray:
    """
    Perform image segmentation using seeded region growing.

    Parameters:
    ----------
    image : np.ndarray
        Input color image, shape [height, width, 3], integer or float channels.
        A [height, width] grayscale image is used as 3 equal channels.

    threshold : float
        Color distance bound. Non-negative and finite.

    seeds : iterable of (x, y), optional
        Seed coordinates as (row, column). None runs exhaustive mode where every
        pixel may start a region; otherwise only the given seeds (and their
        8-neighbours) do.
        Default: None

    adaptive : bool, optional
        Use the adaptive threshold. None picks adaptive for seeded runs and
        fixed for exhaustive runs.
        Default: None

    iteration_cap : int, optional
        Safety bound on expanded pixels for seeded runs.
        Default: MAX_ITERATIONS

    Returns:
    -------
    np.ndarray
        Label map, 0 for unassigned pixels and 1..N for regions.
        Shape: [height, width]
        dtype: int32
    """
    return segment(image, threshold, seeds, adaptive, iteration_cap).labels


def load_image_rgb(path: str) -> np.ndarray:
    """Return H x W x 3 uint8 RGB."""
    img = Image.open(path).convert("RGB")
    return np.asarray(img, dtype=np.uint8)


def process_image_file(image_path: str, threshold: float, seeds: Seeds = None,
                       adaptive: Optional[bool] = None) -> np.ndarray:
    """
    Load an image file and perform segmentation using region growing.

    Parameters:
    ----------
    image_path : str
        Path to the input image file

    threshold : float
        Color distance bound

    seeds : iterable of (x, y), optional
        Seed coordinates, None for exhaustive mode

    adaptive : bool, optional
        Threshold mode, see ``segment_image``

    Returns:
    -------
    np.ndarray
        Label map from segmentation
    """
    return segment_image(load_image_rgb(image_path), threshold, seeds, adaptive)


def colorize(labels: np.ndarray) -> np.ndarray:
    """
    Map a label map to an H x W x 3 uint8 visualization.

    Label 0 is white, label n is (35n, 90n, 30n) modulo 256. Colors repeat for
    large label counts.
    """
    lab = np.asarray(labels, dtype=np.int64)
    out = np.empty(lab.shape + (3,), dtype=np.uint8)
    for channel, factor in enumerate((35, 90, 30)):
        out[..., channel] = (lab * factor) % 256
    out[lab == 0] = 255
    return out


def save_colorized_png(labels: np.ndarray, out_path: str) -> None:
    """Save the colorized label map as an RGB PNG."""
    im = Image.fromarray(colorize(labels))
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    im.save(out_path, format="PNG")
