"""
Functions for visualizing segmentation decisions on images.
"""

import cv2
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from sprite_segmenter.alpha_processing import VISIBLE_ALPHA, visible_mask
from sprite_segmenter.models import Detection, GridDetection, RegionsDetection


def flatten_on_white(img: np.ndarray) -> np.ndarray:
    """Alpha-blend a BGRA image onto a white background, returning BGR."""
    bg = np.ones((img.shape[0], img.shape[1], 3), dtype=np.uint8) * 255
    alpha = img[:, :, 3:4].astype(float) / 255
    return (img[:, :, :3] * alpha + bg * (1 - alpha)).astype(np.uint8)


def visualize_detection(img: np.ndarray, detection: Detection,
                        output_path: str | None = None) -> np.ndarray:
    """
    Draw detected regions (green) or grid lines (magenta) over the image.

    Args:
        img: Input image (BGRA)
        detection: Detection to draw; single detections get a frame around the image
        output_path: Path to save the visualization (optional)

    Returns:
        BGR image with the overlay
    """
    vis_img = flatten_on_white(img)
    height, width = vis_img.shape[:2]

    if isinstance(detection, RegionsDetection):
        for region in detection.regions:
            cv2.rectangle(vis_img, (region.x, region.y), (region.x2 - 1, region.y2 - 1), (0, 255, 0), 1)
    elif isinstance(detection, GridDetection):
        for col in range(detection.cols + 1):
            x = min(col * detection.cell_size, width - 1)
            cv2.line(vis_img, (x, 0), (x, height), (255, 0, 255), 1)  # Magenta
        for row in range(detection.rows + 1):
            y = min(row * detection.cell_size, height - 1)
            cv2.line(vis_img, (0, y), (width, y), (255, 0, 255), 1)
    else:
        cv2.rectangle(vis_img, (0, 0), (width - 1, height - 1), (255, 255, 0), 1)  # Cyan

    if output_path:
        cv2.imwrite(output_path, vis_img)

    return vis_img


def plot_gap_profile(img: np.ndarray, horizontal_gaps: list[int], vertical_gaps: list[int],
                     alpha_threshold: int = VISIBLE_ALPHA) -> np.ndarray:
    """
    Plot the number of visible pixels per row and per column, marking gap midpoints.

    Args:
        img: Input image (BGRA)
        horizontal_gaps: Midpoints of horizontal gaps (row indices)
        vertical_gaps: Midpoints of vertical gaps (column indices)
        alpha_threshold: Alpha value a pixel must exceed to count as visible

    Returns:
        The rendered plot as a BGRA image
    """
    visible = visible_mask(img, alpha_threshold)
    row_counts = visible.sum(axis=1)
    col_counts = visible.sum(axis=0)

    fig = Figure(figsize=(10, 6))
    canvas = FigureCanvasAgg(fig)
    ax_rows, ax_cols = fig.subplots(2, 1)

    for ax, counts, gaps, label in (
        (ax_rows, row_counts, horizontal_gaps, "Row"),
        (ax_cols, col_counts, vertical_gaps, "Column"),
    ):
        ax.bar(np.arange(len(counts)), counts, width=1.0, align='edge', alpha=0.7)
        for gap in gaps:
            ax.axvline(gap, color='magenta', linewidth=1)
        ax.set_title(f"Visible Pixels per {label}")
        ax.set_xlabel(f"{label} (pixels)")
        ax.set_ylabel("Count")
        ax.grid(alpha=0.3)

    fig.tight_layout()
    canvas.draw()
    rgba = np.array(canvas.buffer_rgba())
    return cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
