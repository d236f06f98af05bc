"""
Functions for validating input images and working with their alpha channel.
"""

import cv2
import numpy as np

# Alpha at or below this is treated as empty by gap, trim and content scans
VISIBLE_ALPHA = 50

# Alpha below this counts as transparent for image statistics
TRANSPARENT_ALPHA = 128


def ensure_bgra(image: np.ndarray | None) -> np.ndarray:
    """
    Validate an input image and return it as a BGRA array.

    Args:
        image: Image as numpy array in BGR or BGRA format (uint8)

    Returns:
        The image itself if it already is BGRA, otherwise a new BGRA array
        with a fully opaque alpha channel

    Raises:
        ValueError: If image is None or has invalid type, shape or dtype
    """
    if image is None:
        raise ValueError("image cannot be None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"image must be a numpy array, got {type(image)}")

    if image.ndim != 3:
        raise ValueError(f"image must be 3D array (height, width, channels), got shape {image.shape}")

    if image.shape[2] not in (3, 4):
        raise ValueError(f"image must have 3 (BGR) or 4 (BGRA) channels, got {image.shape[2]}")

    if image.dtype != np.uint8:
        raise ValueError(f"image must be uint8, got {image.dtype}")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"image must be at least 1x1, got shape {image.shape}")

    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    return image


def visible_mask(img: np.ndarray, alpha_threshold: int = VISIBLE_ALPHA) -> np.ndarray:
    """
    Boolean mask of pixels whose alpha is strictly above the threshold.

    Args:
        img: BGRA image
        alpha_threshold: Alpha value a pixel must exceed to count as visible

    Returns:
        Boolean array of shape (height, width)
    """
    return img[:, :, 3] > alpha_threshold


def transparent_mask(img: np.ndarray, alpha_threshold: int = TRANSPARENT_ALPHA) -> np.ndarray:
    """Boolean mask of pixels whose alpha is strictly below the threshold."""
    return img[:, :, 3] < alpha_threshold


def edge_band_mask(height: int, width: int, band: int) -> np.ndarray:
    """
    Boolean mask selecting a border band of the given thickness on all four sides.

    Images thinner than two bands are covered completely.
    """
    mask = np.zeros((height, width), dtype=bool)
    mask[:band, :] = True
    mask[max(0, height - band):, :] = True
    mask[:, :band] = True
    mask[:, max(0, width - band):] = True
    return mask
