"""
Test suite for match verification.

Tests:
- Forward and reversed matches
- Scoring and time bonus tiers
- Already-found words are never counted twice
- Mismatches only clear the selection
"""

import random

import pytest
from src.wordsearch import (
    Direction,
    ScoringRules,
    apply_selection,
    empty_grid,
    generate,
    place_word,
    score_word,
    time_bonus,
    verify,
)
from src.wordsearch.generator import fill_blanks


def build_grid():
    """GATO across row 0, PERRO down column 6, filler elsewhere."""
    grid = empty_grid(12)
    placements = [
        place_word(grid, "GATO", 0, 0, Direction.HORIZONTAL),
        place_word(grid, "PERRO", 2, 6, Direction.VERTICAL),
    ]
    fill_blanks(grid, random.Random(0))
    return grid, placements


GATO_CELLS = [(0, 0), (0, 1), (0, 2), (0, 3)]
PERRO_CELLS = [(2, 6), (3, 6), (4, 6), (5, 6), (6, 6)]


class TestTimeBonus:
    """Bonus tiers for a 300 second round."""

    @pytest.mark.parametrize("remaining,bonus", [
        (300, 20), (241, 20), (240, 10), (121, 10), (120, 0), (0, 0),
    ])
    def test_tiers(self, remaining, bonus):
        assert time_bonus(remaining) == bonus

    def test_score_word(self):
        assert score_word("GATO", 300) == 60
        assert score_word("PERRO", 200) == 60
        assert score_word("PERRO", 30) == 50

    def test_custom_rules(self):
        rules = ScoringRules(points_per_letter=5, time_bonus_tiers=[(10, 1)])
        assert score_word("OSO", 11, rules) == 16
        assert score_word("OSO", 10, rules) == 15


class TestMatches:
    """Selections that spell a target word."""

    def test_forward_match(self):
        grid, placements = build_grid()
        found = []

        result = verify(GATO_CELLS, grid, ["GATO", "PERRO"], found, placements, time_remaining=300)

        assert result.matched == "GATO"
        assert result.forward == "GATO"
        assert result.reversed == "OTAG"
        assert result.points == 10 * 4 + 20
        assert found == ["GATO"]
        assert placements[0].found is True
        assert placements[1].found is False

    def test_reversed_match(self):
        grid, placements = build_grid()
        found = []

        result = verify(list(reversed(GATO_CELLS)), grid, ["GATO", "PERRO"], found, placements)

        assert result.forward == "OTAG"
        assert result.matched == "GATO"
        assert found == ["GATO"]

    def test_cells_marked_found(self):
        grid, placements = build_grid()
        apply_selection(grid, GATO_CELLS)

        verify(GATO_CELLS, grid, ["GATO", "PERRO"], [], placements)

        for row, col in GATO_CELLS:
            cell = grid[row][col]
            assert cell.is_found_word is True
            assert cell.found_word_index == 0
            assert cell.is_selected is False

    def test_found_word_index_counts_up(self):
        grid, placements = build_grid()
        found = []

        first = verify(PERRO_CELLS, grid, ["GATO", "PERRO"], found, placements)
        second = verify(GATO_CELLS, grid, ["GATO", "PERRO"], found, placements)

        assert first.found_word_index == 0
        assert second.found_word_index == 1
        assert grid[0][0].found_word_index == 1
        assert grid[2][6].found_word_index == 0
        assert found == ["PERRO", "GATO"]

    def test_without_placements(self):
        grid, _ = build_grid()
        result = verify(GATO_CELLS, grid, ["GATO"], [])
        assert result.matched == "GATO"


class TestAlreadyFound:
    """Finding the same word again does nothing."""

    def test_second_verify_is_idempotent(self):
        grid, placements = build_grid()
        found = []

        first = verify(GATO_CELLS, grid, ["GATO", "PERRO"], found, placements)
        second = verify(GATO_CELLS, grid, ["GATO", "PERRO"], found, placements)

        assert first.points > 0
        assert second.matched is None
        assert second.points == 0
        assert second.already_found is True
        assert found == ["GATO"]

    def test_reversed_after_forward(self):
        grid, placements = build_grid()
        found = []

        verify(GATO_CELLS, grid, ["GATO"], found, placements)
        result = verify(list(reversed(GATO_CELLS)), grid, ["GATO"], found, placements)

        assert result.matched is None
        assert found == ["GATO"]


class TestMismatches:
    """Selections that do not spell a target word."""

    def test_partial_word(self):
        grid, placements = build_grid()
        apply_selection(grid, GATO_CELLS[:3])
        found = []

        result = verify(GATO_CELLS[:3], grid, ["GATO", "PERRO"], found, placements)

        assert result.matched is None
        assert result.forward == "GAT"
        assert result.already_found is False
        assert found == []
        assert all(not cell.is_selected for row in grid for cell in row)
        assert all(not cell.is_found_word for row in grid for cell in row)
        assert all(p.found is False for p in placements)

    def test_empty_selection(self):
        grid, placements = build_grid()
        result = verify([], grid, ["GATO"], [], placements)
        assert result.matched is None
        assert result.forward == ""

    def test_off_grid_cells_ignored(self):
        grid, placements = build_grid()
        result = verify([(-1, 0), (0, 12)], grid, ["GATO"], [], placements)
        assert result.matched is None
        assert result.cells == []


class TestGeneratedScenario:
    """GATO and PERRO on a generated 12x12 grid."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_find_both_words(self, seed):
        result = generate(["GATO", "PERRO"], size=12, seed=seed)
        assert result.unplaced == []
        found = []

        by_word = {p.word: p for p in result.placements}
        gato = verify(by_word["GATO"].cells(), result.grid, ["GATO", "PERRO"], found,
                      result.placements, time_remaining=300)
        perro = verify(list(reversed(by_word["PERRO"].cells())), result.grid, ["GATO", "PERRO"],
                       found, result.placements, time_remaining=100)

        assert gato.matched == "GATO"
        assert gato.points == 60
        assert perro.matched == "PERRO"
        assert perro.points == 50
        assert found == ["GATO", "PERRO"]
        assert all(p.found for p in result.placements)
