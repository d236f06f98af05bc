"""
Detection of regular sprite sheet grids from image dimensions.
"""

from typing import Iterator

from sprite_segmenter.models import GridDetection, Region

# Common sprite tile sizes, largest first
CANDIDATE_CELL_SIZES = (128, 96, 64, 48, 32, 16)
MIN_GRID_CELLS = 2
MAX_GRID_CELLS = 64


def detect_grid(width: int, height: int,
                cell_sizes: tuple[int, ...] = CANDIDATE_CELL_SIZES,
                max_cells: int = MAX_GRID_CELLS) -> GridDetection | None:
    """
    Guess the grid of a sprite sheet whose sides are exact multiples of a tile size.

    Cell sizes are tried in the given order; the first size that divides both
    sides and yields at least two columns and between MIN_GRID_CELLS and
    max_cells cells wins. Irregular or non-divisor grids are not detected.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        cell_sizes: Candidate square cell sizes
        max_cells: Upper bound on the number of cells

    Returns:
        GridDetection, or None if no candidate size fits
    """
    for size in cell_sizes:
        if width % size == 0 and height % size == 0:
            cols = width // size
            rows = height // size
            if cols >= 2 and rows >= 1 and MIN_GRID_CELLS <= cols * rows <= max_cells:
                return GridDetection(cols=cols, rows=rows, cell_size=size)
    return None


def iter_grid_cells(grid: GridDetection) -> Iterator[tuple[int, int, Region]]:
    """Yield (row, col, region) for every grid cell in row-major order."""
    size = grid.cell_size
    for row in range(grid.rows):
        for col in range(grid.cols):
            yield row, col, Region(col * size, row * size, size, size)
