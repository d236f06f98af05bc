"""
Sprite Segmenter

Splits uploaded pixel art images into individual sprites: decides whether an
image holds one sprite or a sheet of them, finds the sprite boundaries, and
crops each sprite into a clean tile.

Public API:
    - process_spritesheet: Generator yielding sprites and debug images
    - ProcessedImage: Result object containing images with metadata
    - SpriteSegmenter: Configurable segmenter returning typed tiles
    - SpriteTile, Region: Segmentation output types
"""

from sprite_segmenter.api import process_spritesheet, ProcessedImage
from sprite_segmenter.models import (GridDetection, Region, RegionsDetection, SingleDetection,
                                     SpriteTile)
from sprite_segmenter.segmenter import SegmentationResult, SpriteSegmenter, whole_image_tile

__version__ = "0.1.0"
__all__ = [
    "process_spritesheet", "ProcessedImage",
    "SpriteSegmenter", "SegmentationResult", "whole_image_tile",
    "SpriteTile", "Region", "SingleDetection", "RegionsDetection", "GridDetection",
    "__version__",
]
