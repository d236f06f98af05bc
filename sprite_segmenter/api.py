#!/usr/bin/env python3
"""
Public API for the Sprite Segmenter library.

This module provides the main interface for programmatic use of the sprite
sheet segmentation functionality.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator

import numpy as np

from sprite_segmenter.alpha_processing import ensure_bgra, visible_mask
from sprite_segmenter.debug_visualization import plot_gap_profile, visualize_detection
from sprite_segmenter.models import Detection, GridDetection, RegionsDetection, SingleDetection
from sprite_segmenter.region_finder import find_gaps
from sprite_segmenter.segmenter import SpriteSegmenter
from sprite_segmenter.statistics import compute_statistics


@dataclass
class ProcessedImage:
    """
    An image with metadata from the segmentation pipeline.

    Attributes:
        image: The image data as a numpy array (BGRA format for sprites, uint8)
        name: Descriptive name for the image (e.g., "sprite_0", "debug_detection")
        bbox: Source bounding box for sprites as (y1, y2, x1, x2), or None for debug images
        is_debug: True if this is a debug/intermediate image, False for final output sprites
        metadata: Additional metadata (e.g., detection kind, grid position)
    """
    image: np.ndarray
    name: str
    bbox: tuple[int, int, int, int] | None
    is_debug: bool
    metadata: dict[str, str | int | float] | None = None


def detection_metadata(detection: Detection) -> dict[str, str | int | float]:
    """Flatten a detection into metadata entries."""
    metadata: dict[str, str | int | float] = {"detection": detection.kind}
    if isinstance(detection, GridDetection):
        metadata.update(cols=detection.cols, rows=detection.rows, cell_size=detection.cell_size)
    elif isinstance(detection, RegionsDetection):
        metadata["num_regions"] = len(detection.regions)
    return metadata


def process_spritesheet(
    image: np.ndarray | None,
    *,
    cell_size: int = 64,
    min_pixel_threshold: int = 500,
    max_sprites: int = 64,
    no_segment: bool = False,
    force_grid: bool = False,
    debug: bool = False
) -> Generator[ProcessedImage, None, None]:
    """
    Segment an image into sprites and yield them, with debug images if requested.

    The image is classified as a single sprite, a sheet of sprites separated by
    transparent gaps, or a regular grid sheet, and the sprites are cut out
    accordingly. An image where nothing qualifies yields no sprites; the caller
    decides whether to fall back to the whole image.

    Args:
        image: Input image as numpy array in BGR or BGRA format (uint8).
               Must be 3D array with shape (height, width, 3) or (height, width, 4).
        cell_size: Cell size for forced grid slicing.
        min_pixel_threshold: Minimum number of visible pixels for a sprite.
        max_sprites: Maximum number of sprites taken from a grid.
        no_segment: If True, skip classification and treat the entire image
                   as a single sprite.
        force_grid: If True, skip classification and slice the image into
                   cell_size cells.
        debug: If True, yield intermediate images for debugging.

    Yields:
        ProcessedImage objects. Debug images (if enabled) come first, followed
        by the sprites in source order.

    Raises:
        ValueError: If image is None or has invalid shape/dtype, or if
                    force_grid is set and the image is smaller than one cell.

    Example:
        >>> from sprite_segmenter import process_spritesheet
        >>> from sprite_segmenter.sprite_io import load_image
        >>>
        >>> img = load_image("spritesheet.png")
        >>> for result in process_spritesheet(img):
        >>>     print(f"{result.name} from {result.bbox}: {result.metadata['detection']}")
    """
    img = ensure_bgra(image).copy()

    segmenter = SpriteSegmenter(
        cell_size=cell_size,
        min_pixel_threshold=min_pixel_threshold,
        max_sprites=max_sprites
    )

    detection: Detection
    if no_segment:
        detection = SingleDetection()
    elif force_grid:
        detection = segmenter.forced_grid(img)
    else:
        detection = segmenter.classify(img, compute_statistics(img))

    if debug:
        yield ProcessedImage(
            image=visible_mask(img).astype(np.uint8) * 255,
            name="debug_visible_mask",
            bbox=None,
            is_debug=True,
            metadata=None
        )
        yield ProcessedImage(
            image=plot_gap_profile(img, find_gaps(img, 0), find_gaps(img, 1)),
            name="debug_gap_profile",
            bbox=None,
            is_debug=True,
            metadata=None
        )
        yield ProcessedImage(
            image=visualize_detection(img, detection),
            name="debug_detection",
            bbox=None,
            is_debug=True,
            metadata=detection_metadata(detection)
        )

    for tile in segmenter.extract(img, detection):
        metadata = detection_metadata(detection)
        metadata.update(sprite_index=tile.index, origin=tile.origin)
        if tile.grid_position is not None:
            metadata.update(grid_row=tile.grid_position[0], grid_col=tile.grid_position[1])

        yield ProcessedImage(
            image=tile.image,
            name=f"sprite_{tile.index}",
            bbox=tile.region.as_bbox() if tile.region is not None else None,
            is_debug=False,
            metadata=metadata
        )
