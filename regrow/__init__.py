"""
Region Growing Segmentation
---------------------------
Seeded, threshold-driven flood fill that partitions a color image into
connected regions of similar pixels.

Example:
    >>> import numpy as np
    >>> from regrow import segment_image, colorize
    >>>
    >>> # Load your color image as an [H, W, 3] numpy array
    >>> image = ...  # Your image loading code here
    >>>
    >>> # Exhaustive mode: every pixel may start a region (fixed threshold)
    >>> labels = segment_image(image, threshold=10)
    >>>
    >>> # Interactive mode: grow from (row, column) seeds (adaptive threshold)
    >>> labels = segment_image(image, threshold=5, seeds=[(40, 60), (120, 30)])
    >>>
    >>> # 0 = unassigned, 1..N = regions
    >>> rgb = colorize(labels)
"""

from .core import (
    colorize,
    load_image_rgb,
    process_image_file,
    save_colorized_png,
    segment,
    segment_image,
)
from .grower import MAX_ITERATIONS, MIN_REGION_AREA, RETRY_OFFSET, RegionGrower, SegmentationResult

__version__ = "0.1.0"
__all__ = [
    "segment_image",
    "segment",
    "process_image_file",
    "load_image_rgb",
    "colorize",
    "save_colorized_png",
    "RegionGrower",
    "SegmentationResult",
    "MIN_REGION_AREA",
    "RETRY_OFFSET",
    "MAX_ITERATIONS",
]
