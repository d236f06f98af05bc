"""
Whole-image transparency statistics used to choose a segmentation strategy.
"""

from dataclasses import dataclass

import numpy as np

from sprite_segmenter.alpha_processing import TRANSPARENT_ALPHA, edge_band_mask, transparent_mask

EDGE_BAND = 5
TRANSPARENCY_RATIO = 0.05
EDGE_TRANSPARENCY_RATIO = 0.5


@dataclass(frozen=True)
class ImageStatistics:
    """
    Transparency summary of an image.

    Attributes:
        transparent_ratio: Fraction of all pixels that are transparent
        edge_transparent_ratio: Fraction of the border band pixels that are transparent
    """
    transparent_ratio: float
    edge_transparent_ratio: float

    @property
    def has_transparency(self) -> bool:
        return self.transparent_ratio > TRANSPARENCY_RATIO

    @property
    def has_transparent_edges(self) -> bool:
        return self.edge_transparent_ratio > EDGE_TRANSPARENCY_RATIO


def compute_statistics(img: np.ndarray, alpha_threshold: int = TRANSPARENT_ALPHA,
                       edge_band: int = EDGE_BAND) -> ImageStatistics:
    """
    Measure how much of the image, and of its border, is transparent.

    Args:
        img: BGRA image, at least 1x1
        alpha_threshold: Pixels with alpha below this are transparent
        edge_band: Thickness of the border band on each side

    Returns:
        ImageStatistics for the image
    """
    height, width = img.shape[:2]
    transparent = transparent_mask(img, alpha_threshold)
    edges = edge_band_mask(height, width, edge_band)

    total_edge_pixels = int(np.count_nonzero(edges))
    edge_transparent = int(np.count_nonzero(transparent & edges))

    return ImageStatistics(
        transparent_ratio=float(np.count_nonzero(transparent)) / (width * height),
        edge_transparent_ratio=edge_transparent / total_edge_pixels if total_edge_pixels > 0 else 0.0,
    )
