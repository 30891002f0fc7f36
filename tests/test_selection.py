"""Test straight-line drag selection."""

import pytest
from src.wordsearch import (
    Coordinate,
    SelectionTracker,
    apply_selection,
    clear_selection,
    compute_line,
    empty_grid,
)


def selected(grid):
    return {(r, c) for r, row in enumerate(grid) for c, cell in enumerate(row) if cell.is_selected}


class TestComputeLine:
    """Test cases for the line between a drag start and end."""

    @pytest.mark.parametrize("point", [(0, 0), (5, 7), (11, 11)])
    def test_same_cell(self, point):
        assert compute_line(point, point) == [point]

    def test_horizontal(self):
        assert compute_line((2, 1), (2, 4)) == [(2, 1), (2, 2), (2, 3), (2, 4)]

    def test_horizontal_backwards(self):
        assert compute_line((2, 4), (2, 1)) == [(2, 4), (2, 3), (2, 2), (2, 1)]

    def test_vertical(self):
        assert compute_line((0, 3), (3, 3)) == [(0, 3), (1, 3), (2, 3), (3, 3)]

    def test_diagonal_down(self):
        assert compute_line((1, 1), (4, 4)) == [(1, 1), (2, 2), (3, 3), (4, 4)]

    def test_diagonal_up(self):
        assert compute_line((5, 2), (2, 5)) == [(5, 2), (4, 3), (3, 4), (2, 5)]

    def test_length(self):
        line = compute_line((0, 0), (0, 11))
        assert len(line) == 12

    @pytest.mark.parametrize("end", [(1, 2), (2, 1), (3, 5), (4, 1)])
    def test_crooked_drag_collapses(self, end):
        assert compute_line((0, 0), end) == [(0, 0)]

    def test_returns_coordinates(self):
        line = compute_line((0, 0), (0, 2))
        assert all(isinstance(c, Coordinate) for c in line)
        assert line[1].col == 1

    def test_end_past_edge_truncated(self):
        assert compute_line((0, 0), (0, 20), size=12)[-1] == (0, 11)
        assert len(compute_line((0, 0), (-3, 0), size=12)) == 1

    def test_crooked_drag_off_grid_collapses(self):
        assert compute_line((0, 0), (5, 20), size=12) == [(0, 0)]

    def test_diagonal_off_top_edge_keeps_direction(self):
        """A diagonal drag past the top edge is cut, never turned horizontal."""
        assert compute_line((0, 2), (-3, 5), size=12) == [(0, 2)]
        assert compute_line((2, 2), (-3, 7), size=12) == [(2, 2), (1, 3), (0, 4)]

    def test_diagonal_off_corner(self):
        assert compute_line((9, 9), (14, 14), size=12) == [(9, 9), (10, 10), (11, 11)]
        assert compute_line((10, 3), (14, -1), size=12) == [(10, 3), (11, 2)]

    def test_off_grid_start_ignored(self):
        assert compute_line((12, 0), (11, 0), size=12) == []


class TestHighlight:
    """Selection flags on the grid."""

    def test_apply_selection(self):
        grid = empty_grid(4)
        apply_selection(grid, [(0, 0), (1, 1)])
        assert selected(grid) == {(0, 0), (1, 1)}

        apply_selection(grid, [(2, 2)])
        assert selected(grid) == {(2, 2)}

    def test_clear_selection(self):
        grid = empty_grid(4)
        apply_selection(grid, [(0, 0), (0, 1)])
        clear_selection(grid)
        assert selected(grid) == set()


class TestSelectionTracker:
    """Drag gestures over a grid."""

    def test_drag(self):
        grid = empty_grid(6)
        tracker = SelectionTracker(grid)

        assert tracker.begin((1, 1)) == [(1, 1)]
        assert tracker.active is True
        assert selected(grid) == {(1, 1)}

        tracker.extend((1, 3))
        assert selected(grid) == {(1, 1), (1, 2), (1, 3)}

        # Moving off the line shrinks the selection back to the start
        tracker.extend((2, 3))
        assert selected(grid) == {(1, 1)}

        tracker.extend((3, 3))
        assert selected(grid) == {(1, 1), (2, 2), (3, 3)}

        cells = tracker.release()
        assert cells == [(1, 1), (2, 2), (3, 3)]
        assert tracker.active is False

    def test_extend_without_begin(self):
        grid = empty_grid(6)
        tracker = SelectionTracker(grid)
        assert tracker.extend((2, 2)) == []
        assert selected(grid) == set()

    def test_begin_off_grid(self):
        tracker = SelectionTracker(empty_grid(6))
        assert tracker.begin((6, 0)) == []
        assert tracker.active is False

    def test_cancel(self):
        grid = empty_grid(6)
        tracker = SelectionTracker(grid)
        tracker.begin((0, 0))
        tracker.extend((0, 4))
        tracker.cancel()
        assert tracker.active is False
        assert tracker.release() == []
        assert selected(grid) == set()
