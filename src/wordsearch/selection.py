"""Straight-line drag selection over the grid."""

from typing import List, Optional

from .grid import in_bounds
from .models import Coordinate, Grid


def compute_line(start: Coordinate, end: Coordinate, size: Optional[int] = None) -> List[Coordinate]:
    """
    Compute the cells between start and end, inclusive.

    Only horizontal, vertical and exact 45 degree lines are allowed; any
    other drag collapses to the start cell. When size is given, the line
    stops at the grid edge and an off-grid start selects nothing.
    """
    start = Coordinate(*start)
    end = Coordinate(*end)

    if size is not None and not in_bounds(size, start):
        return []

    delta_row = end.row - start.row
    delta_col = end.col - start.col
    distance = max(abs(delta_row), abs(delta_col))

    if distance == 0:
        return [start]

    if delta_row != 0 and delta_col != 0 and abs(delta_row) != abs(delta_col):
        return [start]

    step_row = (delta_row > 0) - (delta_row < 0)
    step_col = (delta_col > 0) - (delta_col < 0)

    cells = []
    for i in range(distance + 1):
        cell = Coordinate(start.row + i * step_row, start.col + i * step_col)
        if size is not None and not in_bounds(size, cell):
            break
        cells.append(cell)

    return cells


def apply_selection(grid: Grid, cells: List[Coordinate]) -> None:
    """Mark exactly the given cells as selected."""
    selected = set(cells)
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            cell.is_selected = (r, c) in selected


def clear_selection(grid: Grid) -> None:
    """Unselect every cell."""
    for row in grid:
        for cell in row:
            cell.is_selected = False


class SelectionTracker:
    """
    Tracks a single drag gesture on a grid.

    Every event is handled synchronously: the grid is re-highlighted before
    the call returns.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.start: Optional[Coordinate] = None
        self.cells: List[Coordinate] = []

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def active(self) -> bool:
        return self.start is not None

    def begin(self, coord: Coordinate) -> List[Coordinate]:
        """Start a drag at coord. Off-grid presses are ignored."""
        coord = Coordinate(*coord)
        if not in_bounds(self.size, coord):
            return []

        self.start = coord
        self.cells = [coord]
        apply_selection(self.grid, self.cells)
        return self.cells

    def extend(self, coord: Coordinate) -> List[Coordinate]:
        """Move the drag end to coord and re-highlight the line."""
        if self.start is None:
            return []

        self.cells = compute_line(self.start, coord, size=self.size)
        apply_selection(self.grid, self.cells)
        return self.cells

    def release(self) -> List[Coordinate]:
        """Finish the drag and return the selected cells."""
        cells = self.cells
        self.start = None
        self.cells = []
        return cells

    def cancel(self) -> None:
        """Abandon the drag and clear the highlight."""
        self.start = None
        self.cells = []
        clear_selection(self.grid)
