"""
Content test telling a drawn subject apart from an empty or background-only area.
"""

import numpy as np

from sprite_segmenter.alpha_processing import VISIBLE_ALPHA, visible_mask

MIN_VISIBLE_PIXELS = 500
MIN_COLORED_PIXELS = 50

# Channels above NEAR_WHITE (or all below NEAR_BLACK) are background or outline noise
NEAR_WHITE = 240
NEAR_BLACK = 15


def count_content_pixels(img: np.ndarray, alpha_threshold: int = VISIBLE_ALPHA) -> tuple[int, int]:
    """
    Count visible pixels and, among them, pixels that are neither near-white nor near-black.

    Args:
        img: BGRA image
        alpha_threshold: Alpha value a pixel must exceed to count as visible

    Returns:
        Tuple of (visible pixels, colored pixels)
    """
    visible = visible_mask(img, alpha_threshold)
    color = img[:, :, :3]
    near_white = np.all(color > NEAR_WHITE, axis=2)
    near_black = np.all(color < NEAR_BLACK, axis=2)
    colored = visible & ~near_white & ~near_black
    return int(np.count_nonzero(visible)), int(np.count_nonzero(colored))


def has_content(img: np.ndarray, min_visible_pixels: int = MIN_VISIBLE_PIXELS,
                min_colored_pixels: int = MIN_COLORED_PIXELS) -> bool:
    """
    Check whether an image holds a distinct colored subject.

    Both counts must strictly exceed their thresholds.
    """
    visible, colored = count_content_pixels(img)
    return visible > min_visible_pixels and colored > min_colored_pixels
