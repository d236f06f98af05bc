"""
Cheap dominant-color summary of a sprite.

Pixels are bucketed into named colors with simple comparisons on raw RGB
values, without converting to HSL. Used as a fallback description when no
richer image analysis is available.
"""

import numpy as np

from sprite_segmenter.alpha_processing import TRANSPARENT_ALPHA

COLOR_NAMES = (
    "red", "orange", "yellow", "green",
    "cyan", "blue", "purple", "pink",
    "brown", "white", "gray", "black",
)

BACKGROUND_WHITE = 240


def classify_pixel_colors(img: np.ndarray) -> np.ndarray:
    """
    Assign a color bucket to every opaque, non-background pixel.

    Args:
        img: BGRA image

    Returns:
        Array of indices into COLOR_NAMES, one per counted pixel
    """
    pixels = img.reshape(-1, 4).astype(np.int32)
    b, g, r, a = pixels[:, 0], pixels[:, 1], pixels[:, 2], pixels[:, 3]

    keep = (a >= TRANSPARENT_ALPHA) & ~((r > BACKGROUND_WHITE) & (g > BACKGROUND_WHITE) & (b > BACKGROUND_WHITE))
    b, g, r = b[keep], g[keep], r[keep]

    hi = np.maximum(np.maximum(r, g), b)
    lo = np.minimum(np.minimum(r, g), b)
    chroma = hi - lo
    lightness = (hi + lo) / 2
    denom = 1 - np.abs(2 * lightness / 255 - 1)
    with np.errstate(divide="ignore", invalid="ignore"):
        saturation = np.where(chroma == 0, 0.0, chroma / denom)

    grayscale = (saturation < 0.15) | (chroma < 30)
    red_max = (r >= g) & (r >= b)
    green_max = ~red_max & (g >= r) & (g >= b)
    blue_max = ~red_max & ~green_max

    conditions = [
        grayscale & (lightness > 200),
        grayscale & (lightness > 100),
        grayscale,
        red_max & (g > b + 50) & (r > 200) & (g > 150),
        red_max & (g > b + 50),
        red_max & (b > g + 30),
        red_max & (lightness < 100),
        red_max,
        green_max & (b > r + 30),
        green_max,
        blue_max & (r > g + 30),
    ]
    choices = [COLOR_NAMES.index(name) for name in (
        "white", "gray", "black",
        "yellow", "orange", "pink", "brown", "red",
        "cyan", "green",
        "purple",
    )]
    return np.select(conditions, choices, default=COLOR_NAMES.index("blue"))


def summarize_colors(img: np.ndarray, top: int = 3) -> list[tuple[str, int]]:
    """
    Return the most common color buckets with their share of the counted pixels.

    Args:
        img: BGRA image
        top: Number of buckets to return

    Returns:
        List of (color name, percentage) tuples, most common first. Ties keep
        the order of COLOR_NAMES. Empty if no pixel was counted.
    """
    buckets = classify_pixel_colors(img)
    total = len(buckets)
    if total == 0:
        return []

    counts = np.bincount(buckets, minlength=len(COLOR_NAMES))
    ranked = sorted(
        (i for i in range(len(COLOR_NAMES)) if counts[i] > 0),
        key=lambda i: -counts[i],
    )
    return [(COLOR_NAMES[i], int(counts[i] * 100 / total + 0.5)) for i in ranked[:top]]


def dominant_colors(img: np.ndarray, top: int = 3) -> list[str]:
    """Names of the most common color buckets, most common first."""
    return [name for name, _percentage in summarize_colors(img, top)]
