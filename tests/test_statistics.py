"""
Tests for whole-image transparency statistics.
"""

import pytest

from sprite_segmenter.statistics import compute_statistics
from synthetic_images import blank, draw_blob, solid


def test_fully_transparent_image():
    stats = compute_statistics(blank(20, 20))
    assert stats.transparent_ratio == 1.0
    assert stats.edge_transparent_ratio == 1.0
    assert stats.has_transparency
    assert stats.has_transparent_edges


def test_fully_opaque_image():
    stats = compute_statistics(solid(300, 300))
    assert stats.transparent_ratio == 0.0
    assert stats.edge_transparent_ratio == 0.0
    assert not stats.has_transparency
    assert not stats.has_transparent_edges


def test_content_inside_edge_band_only_affects_overall_ratio():
    img = blank(20, 20)
    draw_blob(img, 5, 5, 10, 10)
    stats = compute_statistics(img)
    assert stats.transparent_ratio == pytest.approx(0.75)
    assert stats.edge_transparent_ratio == 1.0


def test_edge_ratio_counts_border_band():
    # 3px transparent frame around an opaque interior
    img = solid(300, 300, (40, 90, 200))
    img[:3, :, 3] = 0
    img[-3:, :, 3] = 0
    img[:, :3, 3] = 0
    img[:, -3:, 3] = 0
    stats = compute_statistics(img)

    assert stats.transparent_ratio == pytest.approx(3564 / 90000)
    assert stats.edge_transparent_ratio == pytest.approx(3564 / 5900)
    assert not stats.has_transparency
    assert stats.has_transparent_edges


@pytest.mark.parametrize("width,height", [(1, 1), (3, 3), (9, 4)])
def test_tiny_images_are_all_edge(width, height):
    stats = compute_statistics(blank(width, height))
    assert stats.edge_transparent_ratio == 1.0


def test_alpha_threshold_is_strict():
    img = solid(10, 10)
    img[:, :, 3] = 128
    assert compute_statistics(img).transparent_ratio == 0.0
    img[:, :, 3] = 127
    assert compute_statistics(img).transparent_ratio == 1.0
