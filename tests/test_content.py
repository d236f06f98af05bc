"""
Tests for the content test that separates sprites from empty cells.
"""

from sprite_segmenter.content import count_content_pixels, has_content
from synthetic_images import blank, draw_blob, solid


def test_colored_block_has_content():
    img = draw_blob(blank(40, 40), 5, 5, 30, 30)
    assert count_content_pixels(img) == (900, 900)
    assert has_content(img)


def test_visible_threshold_is_strict():
    img = draw_blob(blank(40, 40), 0, 0, 25, 20)
    assert count_content_pixels(img)[0] == 500
    assert not has_content(img)
    assert has_content(img, min_visible_pixels=499)


def test_small_sprite_passes_lower_threshold():
    img = draw_blob(blank(40, 40), 0, 0, 20, 20)
    assert not has_content(img)
    assert has_content(img, min_visible_pixels=100)


def test_near_white_and_near_black_are_not_colored():
    white = solid(30, 30, (250, 245, 241))
    black = solid(30, 30, (14, 3, 0))
    assert count_content_pixels(white) == (900, 0)
    assert count_content_pixels(black) == (900, 0)
    assert not has_content(white)
    assert not has_content(black)


def test_light_gray_counts_as_colored():
    # Only channels strictly above 240 are near-white
    img = solid(30, 30, (240, 240, 240))
    assert count_content_pixels(img) == (900, 900)


def test_faint_pixels_are_invisible():
    img = draw_blob(blank(40, 40), 0, 0, 30, 30, alpha=50)
    assert count_content_pixels(img) == (0, 0)
    draw_blob(img, 0, 0, 30, 30, alpha=51)
    assert count_content_pixels(img) == (900, 900)


def test_outlined_sprite_needs_enough_color():
    img = blank(40, 40)
    draw_blob(img, 0, 0, 40, 40, (0, 0, 0))
    draw_blob(img, 10, 10, 5, 10, (40, 90, 200))
    assert count_content_pixels(img) == (1600, 50)
    assert not has_content(img)
    draw_blob(img, 10, 20, 1, 1, (40, 90, 200))
    assert has_content(img)
