"""Grid building and rendering utilities."""

from typing import Iterable

from .models import Cell, Coordinate, Grid, WordPlacement


def empty_grid(size: int) -> Grid:
    """Build a size x size grid of blank cells."""
    if size < 1:
        raise ValueError(f"Grid size must be positive, got {size}")
    return [[Cell() for _ in range(size)] for _ in range(size)]


def in_bounds(size: int, coord: Coordinate) -> bool:
    """Check whether a coordinate lies inside a size x size grid."""
    return 0 <= coord[0] < size and 0 <= coord[1] < size


def read_letters(grid: Grid, cells: Iterable[Coordinate]) -> str:
    """Concatenate the letters under the given cells, in order."""
    return ''.join(grid[row][col].letter for row, col in cells)


def placement_letters(grid: Grid, placement: WordPlacement) -> str:
    """Read a placement back along its declared direction."""
    return read_letters(grid, placement.cells())


def render_grid(grid: Grid, highlight_found: bool = False) -> str:
    """
    Render the grid to a string, one row per line.

    With highlight_found, letters of found words are lower-cased so they
    stand out in a terminal.
    """
    if not grid:
        return ""

    lines = []
    for row in grid:
        letters = []
        for cell in row:
            letter = cell.letter or '.'
            if highlight_found and cell.is_found_word:
                letter = letter.lower()
            letters.append(letter)
        lines.append(' '.join(letters))

    return '\n'.join(lines)
