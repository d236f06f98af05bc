#!/usr/bin/env python3
"""
Sprite Segmenter - Command Line Interface

Splits an uploaded pixel art image into individual sprites.

Small images and images on a solid background are kept whole. Images with a
transparent background are cut along transparent gaps between sprites, or,
failing that, sliced into a regular grid when their size is a multiple of a
common tile size. Empty grid cells are skipped.
"""

from pathlib import Path
import click
import cv2

from sprite_segmenter.api import process_spritesheet
from sprite_segmenter.color_summary import summarize_colors
from sprite_segmenter.sprite_io import load_image, save_sprites
from sprite_segmenter.segmenter import whole_image_tile


@click.command(context_settings=dict(show_default=True))
@click.argument('input_path', type=click.Path(exists=True))
@click.argument('output_path', type=click.Path())
@click.option('--cell-size', '-c', type=click.IntRange(min=1), default=64,
              help='Cell size used with --force-grid')
@click.option('--min-pixels', '-m', type=int, default=500,
              help='Minimum number of visible pixels for a sprite')
@click.option('--max-sprites', '-x', type=click.IntRange(min=0), default=64,
              help='Maximum number of sprites taken from a grid')
@click.option('--no-segment', '-n', is_flag=True, help='Skip segmentation, keep the entire image')
@click.option('--force-grid', '-g', is_flag=True, help='Slice into cells of --cell-size regardless of layout')
@click.option('--colors', is_flag=True, help='Print the dominant colors of each sprite')
@click.option('--spritesheet', '-s', is_flag=True,
              help='Create a single spritesheet instead of individual files')
@click.option('--debug', '-d', is_flag=True, help='Save intermediate images for debugging')
def main(input_path: str, output_path: str, cell_size: int, min_pixels: int, max_sprites: int,
         no_segment: bool, force_grid: bool, colors: bool, spritesheet: bool, debug: bool) -> None:
    """Split a sprite sheet (or a single sprite) into individual sprite images.

    INPUT_PATH is the path to the input image file.

    OUTPUT_PATH is the base path for the output images; sprites are saved next to
    it as <name>_sprite_<n>.png, or as <name>_spritesheet.png with --spritesheet.
    """
    if no_segment and force_grid:
        click.echo("Error: --no-segment and --force-grid are mutually exclusive", err=True)
        return

    try:
        img = load_image(input_path)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        return
    click.echo(f"Loaded image with shape {img.shape}")

    debug_dir = None
    if debug:
        debug_dir = Path(output_path).parent / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        click.echo(f"Debug mode enabled, saving intermediate images to '{debug_dir}' directory")

    sprites = []
    detection = None
    num_debug_images = 0
    try:
        for result in process_spritesheet(
            img,
            cell_size=cell_size,
            min_pixel_threshold=min_pixels,
            max_sprites=max_sprites,
            no_segment=no_segment,
            force_grid=force_grid,
            debug=debug
        ):
            if result.is_debug:
                if debug_dir:
                    cv2.imwrite(str(debug_dir / f"{result.name}.png"), result.image)
                    num_debug_images += 1
            else:
                sprites.append(result.image)
                if detection is None and result.metadata:
                    detection = result.metadata["detection"]
    except ValueError as e:
        click.echo(f"Error processing image: {e}", err=True)
        return

    if sprites:
        click.echo(f"Detected layout: {detection}")
        click.echo(f"Extracted {len(sprites)} sprite(s)")
    else:
        click.echo("No sprites detected, keeping the whole image as a single sprite")
        sprites = [whole_image_tile(img).image]

    if debug:
        click.echo(f"Saved {num_debug_images} debug image(s) to {debug_dir}")

    if colors:
        for i, sprite in enumerate(sprites):
            summary = ", ".join(f"{name} {pct}%" for name, pct in summarize_colors(sprite)) or "none"
            click.echo(f"  sprite_{i}: {summary}")

    save_sprites(sprites, output_path, create_sheet=spritesheet)

    if spritesheet:
        click.echo(f"Spritesheet saved to {Path(output_path).parent}")
    else:
        click.echo(f"Sprites saved to {Path(output_path).parent}")


if __name__ == "__main__":
    main()
