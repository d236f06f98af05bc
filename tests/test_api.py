"""
End-to-end tests for the sprite_segmenter library API.

Tests that the library can be used programmatically to process images
without using the CLI.
"""

import numpy as np
import pytest

from sprite_segmenter import process_spritesheet, ProcessedImage
from synthetic_images import blank, grid_sheet, solid, two_sprite_sheet


def test_process_spritesheet_basic():
    """Test basic sheet processing with raw numpy array."""
    image = two_sprite_sheet()
    results = list(process_spritesheet(image))

    sprites = [r for r in results if not r.is_debug]
    debug_images = [r for r in results if r.is_debug]

    # Without debug flag, should only get sprites
    assert len(debug_images) == 0, "Should not get debug images without debug=True"
    assert len(sprites) == 2, "Should extract both sprites"

    for i, result in enumerate(sprites):
        assert isinstance(result, ProcessedImage), "Result should be ProcessedImage"

        assert isinstance(result.image, np.ndarray), "Sprite image should be numpy array"
        assert result.image.dtype == np.uint8, "Sprite should be uint8"
        assert result.image.shape[2] == 4, "Sprite should be BGRA (4 channels)"

        assert isinstance(result.bbox, tuple), "bbox should be tuple"
        y1, y2, x1, x2 = result.bbox
        assert 0 <= y1 < y2 <= image.shape[0], "bbox rows should be within image"
        assert 0 <= x1 < x2 <= image.shape[1], "bbox columns should be within image"

        assert result.name == f"sprite_{i}"
        assert result.metadata["detection"] == "regions"
        assert result.metadata["origin"] == "region"
        assert result.metadata["sprite_index"] == i
        assert result.metadata["num_regions"] == 2


def test_process_spritesheet_grid_metadata():
    sprites = [r for r in process_spritesheet(grid_sheet(5, 2)) if not r.is_debug]
    assert len(sprites) == 10
    last = sprites[-1].metadata
    assert last["detection"] == "grid"
    assert (last["cols"], last["rows"], last["cell_size"]) == (5, 2, 64)
    assert (last["grid_row"], last["grid_col"]) == (1, 4)


def test_process_spritesheet_no_segment():
    """Test processing entire image without segmentation."""
    image = two_sprite_sheet()
    sprites = [r for r in process_spritesheet(image, no_segment=True) if not r.is_debug]

    assert len(sprites) == 1, "no_segment should return single sprite"
    assert sprites[0].bbox == (0, image.shape[0], 0, image.shape[1]), "bbox should cover the entire image"
    assert sprites[0].metadata["detection"] == "single"


def test_process_spritesheet_force_grid():
    image = two_sprite_sheet()
    sprites = [r for r in process_spritesheet(image, force_grid=True, cell_size=100,
                                              min_pixel_threshold=1000) if not r.is_debug]
    # Three 100px cells side by side, each holding part of a sprite
    assert [s.bbox for s in sprites] == [(0, 100, 0, 100), (0, 100, 100, 200), (0, 100, 200, 300)]
    assert all(s.metadata["origin"] == "grid" for s in sprites)


def test_process_spritesheet_force_grid_too_large():
    with pytest.raises(ValueError, match="larger"):
        list(process_spritesheet(blank(50, 50), force_grid=True, cell_size=64))


def test_process_spritesheet_bgr_input():
    """Test that BGR images (without alpha) are handled correctly."""
    image = solid(300, 300)[:, :, :3].copy()
    sprites = [r for r in process_spritesheet(image) if not r.is_debug]
    assert len(sprites) == 1
    assert sprites[0].image.shape == (300, 300, 4), "Output should be BGRA"


def test_process_spritesheet_does_not_modify_input():
    image = two_sprite_sheet()
    original = image.copy()
    for result in process_spritesheet(image, debug=True):
        result.image[:] = 0
    assert np.array_equal(image, original)


def test_process_spritesheet_invalid_input():
    """Test that invalid inputs raise appropriate errors."""
    with pytest.raises(ValueError, match="image.*None"):
        list(process_spritesheet(None))  # type: ignore

    with pytest.raises(ValueError, match="shape"):
        list(process_spritesheet(np.zeros((10, 10), dtype=np.uint8)))  # 2D array, needs 3D

    with pytest.raises(ValueError, match="channels"):
        list(process_spritesheet(np.zeros((10, 10, 2), dtype=np.uint8)))


def test_sprite_result_in_order():
    """Test that sprites are returned in order they appear in source."""
    sprites = [r for r in process_spritesheet(grid_sheet(5, 2)) if not r.is_debug]
    positions = [(s.bbox[0], s.bbox[2]) for s in sprites]
    assert positions == sorted(positions), "Sprites should be in row-major order"


def test_process_spritesheet_debug_mode():
    """Test that debug mode yields debug images."""
    results = list(process_spritesheet(two_sprite_sheet(), debug=True))

    sprites = [r for r in results if not r.is_debug]
    debug_images = [r for r in results if r.is_debug]

    assert len(sprites) == 2, "Should extract sprites"
    assert [d.name for d in debug_images] == ["debug_visible_mask", "debug_gap_profile", "debug_detection"]
    assert all(r.is_debug for r in results[:3]), "Debug images should come before sprites"

    for debug_img in debug_images:
        assert debug_img.bbox is None
        assert isinstance(debug_img.image, np.ndarray), "Debug image should be numpy array"

    assert debug_images[-1].metadata == {"detection": "regions", "num_regions": 2}
