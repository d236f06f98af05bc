"""
Sprite segmentation: decide how an image is laid out and cut it into sprite tiles.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from sprite_segmenter.alpha_processing import ensure_bgra
from sprite_segmenter.classifier import ClassificationRule, classify, default_rules
from sprite_segmenter.content import MIN_COLORED_PIXELS, has_content
from sprite_segmenter.grid_detection import iter_grid_cells
from sprite_segmenter.models import Detection, GridDetection, Region, RegionsDetection, SpriteTile
from sprite_segmenter.region_finder import MIN_REGION_SIDE
from sprite_segmenter.statistics import ImageStatistics, compute_statistics


@dataclass
class SegmentationResult:
    """
    Outcome of segmenting one image.

    Attributes:
        detection: How the image was classified
        statistics: Transparency statistics of the image
        tiles: Extracted sprites in source order; may be empty
    """
    detection: Detection
    statistics: ImageStatistics
    tiles: list[SpriteTile]


def whole_image_tile(image: np.ndarray) -> SpriteTile:
    """A tile holding a copy of the whole image, for callers that found no sprites."""
    img = ensure_bgra(image)
    height, width = img.shape[:2]
    return SpriteTile(image=img.copy(), index=0, origin="single", region=Region(0, 0, width, height))


def center_on_square(sprite: np.ndarray) -> np.ndarray:
    """
    Center a sprite on a transparent square canvas with side max(width, height).
    """
    height, width = sprite.shape[:2]
    size = max(width, height)
    canvas = np.zeros((size, size, 4), dtype=np.uint8)
    y_offset = (size - height) // 2
    x_offset = (size - width) // 2
    canvas[y_offset:y_offset + height, x_offset:x_offset + width] = sprite
    return canvas


class SpriteSegmenter:
    """
    Splits uploaded images into sprite tiles.

    Args:
        cell_size: Cell size used when grid slicing is forced; automatic grid
                   detection picks its own size
        min_pixel_threshold: A tile needs more visible pixels than this
        max_sprites: Maximum number of tiles taken from a grid
        rules: Classification chain, the default chain if None
    """

    def __init__(self, cell_size: int = 64, min_pixel_threshold: int = 500,
                 max_sprites: int = 64, rules: list[ClassificationRule] | None = None):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        if max_sprites < 0:
            raise ValueError(f"max_sprites cannot be negative, got {max_sprites}")
        self.cell_size = cell_size
        self.min_pixel_threshold = min_pixel_threshold
        self.max_sprites = max_sprites
        self.rules = rules if rules is not None else default_rules()

    def has_content(self, img: np.ndarray) -> bool:
        return has_content(img, self.min_pixel_threshold, MIN_COLORED_PIXELS)

    def analyze(self, image: np.ndarray) -> ImageStatistics:
        return compute_statistics(ensure_bgra(image))

    def classify(self, image: np.ndarray, stats: ImageStatistics | None = None) -> Detection:
        img = ensure_bgra(image)
        if stats is None:
            stats = compute_statistics(img)
        return classify(img, stats, self.rules)

    def forced_grid(self, image: np.ndarray) -> GridDetection:
        """
        Grid of cell_size cells covering as much of the image as fits.

        Raises:
            ValueError: If the image is smaller than one cell
        """
        height, width = image.shape[:2]
        cols = width // self.cell_size
        rows = height // self.cell_size
        if cols == 0 or rows == 0:
            raise ValueError(f"cell size {self.cell_size} is larger than the {width}x{height} image")
        return GridDetection(cols=cols, rows=rows, cell_size=self.cell_size)

    def extract(self, image: np.ndarray, detection: Detection) -> list[SpriteTile]:
        """
        Cut tiles out of an image according to a detection.

        Returned tiles own their pixel data; the input image is not modified.
        """
        img = ensure_bgra(image)
        if isinstance(detection, RegionsDetection):
            return self.extract_regions(img, detection.regions)
        if isinstance(detection, GridDetection):
            return self.extract_grid_cells(img, detection)
        return self.extract_single(img)

    def extract_single(self, img: np.ndarray) -> list[SpriteTile]:
        height, width = img.shape[:2]
        if width <= MIN_REGION_SIDE or height <= MIN_REGION_SIDE:
            return []
        return [whole_image_tile(img)]

    def extract_regions(self, img: np.ndarray, regions: tuple[Region, ...] | list[Region]) -> list[SpriteTile]:
        """Crop each region, drop the ones without content and center the rest on square tiles."""
        tiles: list[SpriteTile] = []
        for region in regions:
            if region.width <= MIN_REGION_SIDE or region.height <= MIN_REGION_SIDE:
                continue
            sprite = region.crop(img)
            if not self.has_content(sprite):
                continue
            tiles.append(SpriteTile(
                image=center_on_square(sprite),
                index=len(tiles),
                origin="region",
                region=region,
            ))
        return tiles

    def extract_grid_cells(self, img: np.ndarray, grid: GridDetection) -> list[SpriteTile]:
        """
        Take every grid cell with content, row-major, up to max_sprites tiles.

        Indices count accepted cells only.
        """
        tiles: list[SpriteTile] = []
        for row, col, region in iter_grid_cells(grid):
            if len(tiles) >= self.max_sprites:
                break
            cell = region.crop(img)
            if not self.has_content(cell):
                continue
            tiles.append(SpriteTile(
                image=cell.copy(),
                index=len(tiles),
                origin="grid",
                region=region,
                grid_position=(row, col),
            ))
        return tiles

    def segment(self, image: np.ndarray) -> SegmentationResult:
        """
        Classify an image and extract its sprites.

        Segmenting the same image twice gives identical results. An empty tile
        list is a valid outcome; callers usually fall back to whole_image_tile().
        """
        img = ensure_bgra(image)
        stats = compute_statistics(img)
        detection = classify(img, stats, self.rules)
        return SegmentationResult(detection=detection, statistics=stats, tiles=self.extract(img, detection))
