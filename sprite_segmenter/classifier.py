"""
Classification of an image as a single sprite, a gap-separated sheet or a grid sheet.

Classification runs an ordered list of rules. Each rule looks at the image and
its statistics and either returns a detection or None; the first detection
returned wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from sprite_segmenter.grid_detection import CANDIDATE_CELL_SIZES, MAX_GRID_CELLS, detect_grid
from sprite_segmenter.models import Detection, GridDetection, RegionsDetection, SingleDetection
from sprite_segmenter.region_finder import find_regions
from sprite_segmenter.statistics import ImageStatistics

SMALL_IMAGE_SIZE = 200
MAX_REGIONS = 20


@dataclass(frozen=True)
class ClassificationRule:
    """A named step of the classification chain."""
    name: str
    decide: Callable[[np.ndarray, ImageStatistics], Detection | None]


def _small_image(max_size: int) -> Callable[[np.ndarray, ImageStatistics], Detection | None]:
    def decide(img: np.ndarray, stats: ImageStatistics) -> Detection | None:
        height, width = img.shape[:2]
        if width < max_size and height < max_size:
            return SingleDetection()
        return None
    return decide


def _transparent_regions(max_regions: int) -> Callable[[np.ndarray, ImageStatistics], Detection | None]:
    def decide(img: np.ndarray, stats: ImageStatistics) -> Detection | None:
        if not (stats.has_transparency and stats.has_transparent_edges):
            return None
        regions = find_regions(img)
        if 1 <= len(regions) <= max_regions:
            return RegionsDetection(tuple(regions))
        return None
    return decide


def _transparent_grid(cell_sizes: tuple[int, ...],
                      max_cells: int) -> Callable[[np.ndarray, ImageStatistics], Detection | None]:
    def decide(img: np.ndarray, stats: ImageStatistics) -> GridDetection | None:
        if not (stats.has_transparency and stats.has_transparent_edges):
            return None
        height, width = img.shape[:2]
        return detect_grid(width, height, cell_sizes, max_cells)
    return decide


def _solid_edges(img: np.ndarray, stats: ImageStatistics) -> Detection | None:
    # A solid backdrop usually means one character exported on a plain background
    if not stats.has_transparent_edges:
        return SingleDetection()
    return None


def _fallback(img: np.ndarray, stats: ImageStatistics) -> Detection:
    return SingleDetection()


def default_rules(
    *,
    small_image_size: int = SMALL_IMAGE_SIZE,
    max_regions: int = MAX_REGIONS,
    cell_sizes: tuple[int, ...] = CANDIDATE_CELL_SIZES,
    max_grid_cells: int = MAX_GRID_CELLS,
) -> list[ClassificationRule]:
    """
    Build the standard classification chain.

    Args:
        small_image_size: Images narrower and shorter than this are single sprites
        max_regions: More gap-separated regions than this are not accepted as a sheet
        cell_sizes: Candidate grid cell sizes, tried in order
        max_grid_cells: Upper bound on the number of grid cells

    Returns:
        Rules in evaluation order
    """
    return [
        ClassificationRule("small_image", _small_image(small_image_size)),
        ClassificationRule("transparent_regions", _transparent_regions(max_regions)),
        ClassificationRule("transparent_grid", _transparent_grid(cell_sizes, max_grid_cells)),
        ClassificationRule("solid_edges", _solid_edges),
        ClassificationRule("fallback", _fallback),
    ]


def first_matching_rule(img: np.ndarray, stats: ImageStatistics,
                        rules: list[ClassificationRule] | None = None
                        ) -> tuple[ClassificationRule | None, Detection]:
    """
    Evaluate rules in order and stop at the first one that returns a detection.

    Returns:
        Tuple of (matching rule, detection). If no rule matches, the rule is None
        and the detection is SingleDetection.
    """
    if rules is None:
        rules = default_rules()

    for rule in rules:
        detection = rule.decide(img, stats)
        if detection is not None:
            return rule, detection

    return None, SingleDetection()


def classify(img: np.ndarray, stats: ImageStatistics,
             rules: list[ClassificationRule] | None = None) -> Detection:
    """Classify an image using the given rules (the default chain if None)."""
    return first_matching_rule(img, stats, rules)[1]
