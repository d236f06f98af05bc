"""
Functions for decoding uploaded images and saving sprites as individual images
or as a spritesheet.
"""

import os
from pathlib import Path

import cv2
import numpy as np


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes (PNG, JPEG, ...) into a BGRA array.

    Args:
        data: Raw file contents

    Returns:
        Decoded image as a BGRA numpy array (uint8)

    Raises:
        ValueError: If the bytes cannot be decoded as an image
    """
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED) if buf.size else None
    if img is None:
        raise ValueError("Could not decode image data")

    # 16-bit sources are reduced to 8 bits per channel
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
    if img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2BGRA)
    return img


def load_image(path: str | Path) -> np.ndarray:
    """
    Load an image file as a BGRA array.

    Raises:
        ValueError: If the file cannot be read or decoded
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ValueError(f"Could not read image from {path}: {e}") from e
    try:
        return decode_image(data)
    except ValueError as e:
        raise ValueError(f"Could not load image from {path}") from e


def save_individual_sprites(
    sprites: list[np.ndarray],
    output_path: str
) -> list[Path]:
    """
    Save each sprite as an individual file.

    Args:
        sprites: List of sprite images (NumPy arrays)
        output_path: Base path for the output files

    Returns:
        Paths of the written files
    """
    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for i, sprite in enumerate(sprites):
        sprite_filename = f"{Path(output_path).stem}_sprite_{i}.png"
        sprite_path = Path(os.path.join(output_dir, sprite_filename))
        cv2.imwrite(str(sprite_path), sprite)
        written.append(sprite_path)
    return written


def pack_spritesheet(sprites: list[np.ndarray], border_size: int = 2) -> np.ndarray | None:
    """
    Pack sprites into one roughly square BGRA sheet with transparent borders.

    Each sprite is centered in a slot as large as the largest sprite.

    Returns:
        The packed sheet, or None if there are no sprites
    """
    if not sprites:
        return None

    max_width = max(sprite.shape[1] for sprite in sprites)
    max_height = max(sprite.shape[0] for sprite in sprites)

    num_sprites = len(sprites)
    num_cols = int(np.ceil(np.sqrt(num_sprites)))
    num_rows = (num_sprites + num_cols - 1) // num_cols  # Ceiling division

    sheet_width = num_cols * (max_width + border_size) + border_size
    sheet_height = num_rows * (max_height + border_size) + border_size
    spritesheet = np.zeros((sheet_height, sheet_width, 4), dtype=np.uint8)

    for i, sprite in enumerate(sprites):
        row = i // num_cols
        col = i % num_cols

        y_pos = row * (max_height + border_size) + border_size
        x_pos = col * (max_width + border_size) + border_size
        y_offset = (max_height - sprite.shape[0]) // 2
        x_offset = (max_width - sprite.shape[1]) // 2

        spritesheet[
            y_pos + y_offset:y_pos + y_offset + sprite.shape[0],
            x_pos + x_offset:x_pos + x_offset + sprite.shape[1]
        ] = sprite

    return spritesheet


def create_spritesheet(
    sprites: list[np.ndarray],
    output_path: str,
    border_size: int = 2
) -> Path | None:
    """
    Save all sprites packed into a single spritesheet.

    Args:
        sprites: List of sprite images (NumPy arrays, BGRA)
        output_path: Path for the output spritesheet
        border_size: Size of the transparent border between sprites (default: 2)

    Returns:
        Path of the written sheet, or None if there were no sprites
    """
    spritesheet = pack_spritesheet(sprites, border_size)
    if spritesheet is None:
        return None

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)
    spritesheet_path = Path(os.path.join(output_dir, f"{Path(output_path).stem}_spritesheet.png"))
    cv2.imwrite(str(spritesheet_path), spritesheet)
    return spritesheet_path


def save_sprites(
    sprites: list[np.ndarray],
    output_path: str,
    create_sheet: bool = False,
    border_size: int = 2
) -> list[Path]:
    """
    Save sprites either as individual files or as a spritesheet.

    Args:
        sprites: List of sprite images (NumPy arrays)
        output_path: Base path for output
        create_sheet: If True, create a spritesheet instead of individual files
        border_size: Size of transparent border in spritesheet (default: 2)

    Returns:
        Paths of the written files
    """
    if create_sheet:
        sheet_path = create_spritesheet(sprites, output_path, border_size)
        return [sheet_path] if sheet_path is not None else []
    return save_individual_sprites(sprites, output_path)
