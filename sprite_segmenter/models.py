"""
Data types shared by the segmentation pipeline.

Bounding boxes are reported as (y1, y2, x1, x2) tuples, where y1, y2 are row
indices and x1, x2 are column indices (end-exclusive).
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import ClassVar, Literal

import cv2
import numpy as np


TileOrigin = Literal["single", "region", "grid"]


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle in source image pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    def as_bbox(self) -> tuple[int, int, int, int]:
        return (self.y, self.y2, self.x, self.x2)

    def crop(self, img: np.ndarray) -> np.ndarray:
        """Return a view of the image covered by this region."""
        return img[self.y:self.y2, self.x:self.x2]


@dataclass(frozen=True)
class SingleDetection:
    """The whole image is one sprite."""
    kind: ClassVar[str] = "single"


@dataclass(frozen=True)
class RegionsDetection:
    """Sprites separated by transparent gaps, already trimmed and padded."""
    regions: tuple[Region, ...]
    kind: ClassVar[str] = "regions"


@dataclass(frozen=True)
class GridDetection:
    """Sprites laid out on a regular grid of square cells."""
    cols: int
    rows: int
    cell_size: int
    kind: ClassVar[str] = "grid"

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows


Detection = SingleDetection | RegionsDetection | GridDetection


@dataclass(frozen=True, eq=False)
class SpriteTile:
    """
    One extracted sprite.

    Attributes:
        image: Sprite pixels as a BGRA numpy array (uint8), owned by the tile
        index: Position among the tiles emitted for the source image
        origin: Which extraction branch produced the tile
        region: Area of the source image the pixels were copied from
        grid_position: (row, col) of the cell for grid tiles, None otherwise
    """
    image: np.ndarray
    index: int
    origin: TileOrigin
    region: Region | None = None
    grid_position: tuple[int, int] | None = None

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    def encode_png(self) -> bytes:
        ok, encoded = cv2.imencode(".png", self.image)
        if not ok:
            raise ValueError(f"Could not encode sprite {self.index} as PNG")
        return encoded.tobytes()

    def to_data_url(self) -> str:
        """PNG data URL, the form accepted by the vision and generation APIs."""
        payload = base64.b64encode(self.encode_png()).decode("ascii")
        return f"data:image/png;base64,{payload}"
