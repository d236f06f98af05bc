"""
Tests for image decoding and sprite saving.
"""

import cv2
import numpy as np
import pytest

from sprite_segmenter.sprite_io import decode_image, load_image, pack_spritesheet, save_sprites
from synthetic_images import blank, draw_blob, two_sprite_sheet


def encode(img, ext=".png"):
    ok, data = cv2.imencode(ext, img)
    assert ok
    return data.tobytes()


def test_decode_png_keeps_alpha():
    img = two_sprite_sheet()
    assert np.array_equal(decode_image(encode(img)), img)


def test_decode_adds_alpha_to_bgr_and_gray():
    bgr = np.full((12, 20, 3), 100, dtype=np.uint8)
    decoded = decode_image(encode(bgr))
    assert decoded.shape == (12, 20, 4)
    assert (decoded[:, :, 3] == 255).all()

    gray = np.full((12, 20), 100, dtype=np.uint8)
    decoded = decode_image(encode(gray))
    assert decoded.shape == (12, 20, 4)
    assert (decoded[:, :, :3] == 100).all()


@pytest.mark.parametrize("data", [b"", b"not an image at all"])
def test_decode_failure(data):
    with pytest.raises(ValueError, match="decode"):
        decode_image(data)


def test_load_image(tmp_path):
    path = tmp_path / "sheet.png"
    path.write_bytes(encode(two_sprite_sheet()))
    assert load_image(path).shape == (100, 300, 4)

    with pytest.raises(ValueError, match="missing.png"):
        load_image(tmp_path / "missing.png")

    broken = tmp_path / "broken.png"
    broken.write_bytes(b"garbage")
    with pytest.raises(ValueError, match="broken.png"):
        load_image(broken)


def test_pack_spritesheet_layout():
    sprites = [draw_blob(blank(10, 20), 0, 0, 10, 20) for _ in range(3)]
    sheet = pack_spritesheet(sprites, border_size=2)
    # Two columns, two rows of 10x20 slots
    assert sheet.shape == (2 * 22 + 2, 2 * 12 + 2, 4)
    assert (sheet[2:22, 2:12, 3] == 255).all()
    assert (sheet[:2, :, 3] == 0).all()
    assert pack_spritesheet([]) is None


def test_save_sprites(tmp_path):
    sprites = [draw_blob(blank(16, 16), 0, 0, 16, 16) for _ in range(2)]
    output = tmp_path / "out" / "monster.png"

    written = save_sprites(sprites, str(output))
    assert [p.name for p in written] == ["monster_sprite_0.png", "monster_sprite_1.png"]
    assert all(p.exists() for p in written)

    written = save_sprites(sprites, str(output), create_sheet=True)
    assert [p.name for p in written] == ["monster_spritesheet.png"]
    assert cv2.imread(str(written[0]), cv2.IMREAD_UNCHANGED).shape[2] == 4
