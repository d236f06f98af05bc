"""
Functions for segmenting sprites in a sprite sheet along transparent gaps.
"""

import numpy as np

from sprite_segmenter.alpha_processing import VISIBLE_ALPHA, visible_mask
from sprite_segmenter.models import Region

MIN_GAP = 8
REGION_PADDING = 2
MIN_REGION_SIDE = 10
MIN_REGION_VISIBLE_PIXELS = 100


def find_gaps(img: np.ndarray, axis: int, min_gap: int = MIN_GAP,
              alpha_threshold: int = VISIBLE_ALPHA) -> list[int]:
    """
    Find runs of empty rows or columns and return the midpoint of each.

    A run only counts as a gap when it is closed by a non-empty line, so a run
    reaching the bottom or right edge of the image is ignored.

    Args:
        img: BGRA image
        axis: 0 to scan rows (horizontal gaps), 1 to scan columns (vertical gaps)
        min_gap: Minimum run length, in pixels, for a gap
        alpha_threshold: Lines where no pixel's alpha exceeds this are empty

    Returns:
        Sorted list of gap midpoints (y for rows, x for columns)
    """
    visible = visible_mask(img, alpha_threshold)
    empty = ~visible.any(axis=1 - axis)

    # Find run boundaries (0->1 starts, 1->0 ends)
    transitions = np.diff(np.concatenate(([0], empty.astype(np.int8), [0])))
    starts = np.where(transitions == 1)[0]
    ends = np.where(transitions == -1)[0]

    gaps = []
    for start, end in zip(starts, ends):
        if end < len(empty) and end - start >= min_gap:
            gaps.append(int((start + end) // 2))
    return gaps


def trim_region(img: np.ndarray, region: Region, padding: int = REGION_PADDING,
                alpha_threshold: int = VISIBLE_ALPHA) -> Region | None:
    """
    Shrink a region to the bounding box of its visible pixels, then pad it.

    Args:
        img: BGRA image
        region: Region to trim
        padding: Pixels added on every side, clamped to the image bounds
        alpha_threshold: Alpha value a pixel must exceed to count as content

    Returns:
        The trimmed region, or None if the region has no visible pixels
    """
    height, width = img.shape[:2]
    ys, xs = np.nonzero(visible_mask(region.crop(img), alpha_threshold))
    if len(xs) == 0:
        return None

    min_x = region.x + int(xs.min())
    max_x = region.x + int(xs.max())
    min_y = region.y + int(ys.min())
    max_y = region.y + int(ys.max())

    x1 = max(0, min_x - padding)
    y1 = max(0, min_y - padding)
    x2 = min(width, max_x + 1 + padding)
    y2 = min(height, max_y + 1 + padding)
    return Region(x1, y1, x2 - x1, y2 - y1)


def find_regions(
    img: np.ndarray,
    *,
    min_gap: int = MIN_GAP,
    padding: int = REGION_PADDING,
    min_side: int = MIN_REGION_SIDE,
    min_visible_pixels: int = MIN_REGION_VISIBLE_PIXELS,
    alpha_threshold: int = VISIBLE_ALPHA,
) -> list[Region]:
    """
    Segment individual sprites from a sprite sheet using transparent gaps.

    The image is cut along the midpoints of all horizontal and vertical gaps.
    Every resulting cell with enough visible pixels is trimmed to its content
    and padded.

    Args:
        img: BGRA image
        min_gap: Minimum length of a run of empty lines to cut along
        padding: Padding added around each trimmed region
        min_side: Trimmed regions must be wider and taller than this
        min_visible_pixels: Cells must have more visible pixels than this
        alpha_threshold: Alpha value a pixel must exceed to count as visible

    Returns:
        List of sprite regions in row-major order, empty if no gaps were found
    """
    height, width = img.shape[:2]
    horizontal_gaps = find_gaps(img, 0, min_gap, alpha_threshold)
    vertical_gaps = find_gaps(img, 1, min_gap, alpha_threshold)

    if not horizontal_gaps and not vertical_gaps:
        return []

    x_boundaries = [0, *vertical_gaps, width]
    y_boundaries = [0, *horizontal_gaps, height]

    regions = []
    for y1, y2 in zip(y_boundaries, y_boundaries[1:]):
        for x1, x2 in zip(x_boundaries, x_boundaries[1:]):
            cell = Region(x1, y1, x2 - x1, y2 - y1)
            visible = np.count_nonzero(visible_mask(cell.crop(img), alpha_threshold))
            if visible <= min_visible_pixels:
                continue

            trimmed = trim_region(img, cell, padding, alpha_threshold)
            if trimmed is not None and trimmed.width > min_side and trimmed.height > min_side:
                regions.append(trimmed)

    return regions
