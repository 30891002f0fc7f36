"""
Word search grid generation.

Words are placed one at a time at random positions along one of four
directions. A position is accepted when every letter lands inside the grid
on a cell that is either blank or already holds the same letter, so words
may cross. Words that cannot be placed within the attempt budget are
dropped and reported back to the caller. Blank cells are finally filled
with random letters.
"""

import logging
import random
import re
import string
from typing import List, Optional, Sequence

from .grid import empty_grid, in_bounds
from .models import (
    Coordinate,
    Direction,
    GenerationResult,
    Grid,
    WordPlacement,
    direction_vector,
)


logger = logging.getLogger(__name__)

GRID_SIZE = 12
MAX_ATTEMPTS = 100
DIRECTIONS: List[Direction] = list(Direction)


def normalize_words(words: Sequence[str]) -> List[str]:
    """Uppercase and validate a list of target words."""
    normalized = []
    for word in words:
        cleaned = word.strip().upper()
        if not re.match(r'^[A-Z]+$', cleaned):
            raise ValueError(f"Invalid word '{word}': only letters A-Z are allowed")
        normalized.append(cleaned)
    return normalized


def can_place(grid: Grid, word: str, row: int, col: int, direction: Direction) -> bool:
    """Check whether a word fits at (row, col) without clashing letters."""
    size = len(grid)
    d_row, d_col = direction_vector(direction)

    for i, letter in enumerate(word):
        cell = Coordinate(row + i * d_row, col + i * d_col)
        if not in_bounds(size, cell):
            return False

        existing = grid[cell.row][cell.col].letter
        if existing and existing != letter:
            return False

    return True


def place_word(grid: Grid, word: str, row: int, col: int, direction: Direction) -> WordPlacement:
    """Write a word into the grid. The caller must check can_place first."""
    d_row, d_col = direction_vector(direction)

    for i, letter in enumerate(word):
        cell = grid[row + i * d_row][col + i * d_col]
        cell.letter = letter
        cell.is_part_of_word = True

    return WordPlacement(word=word, start_row=row, start_col=col, direction=direction)


def fill_blanks(grid: Grid, rng: random.Random) -> None:
    """Fill every blank cell with a uniformly random uppercase letter."""
    for row in grid:
        for cell in row:
            if not cell.letter:
                cell.letter = rng.choice(string.ascii_uppercase)


def generate(
    words: Sequence[str],
    size: int = GRID_SIZE,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> GenerationResult:
    """
    Generate a word search grid.

    Args:
        words: Target words, placed in the given order
        size: Side length of the square grid
        seed: Optional random seed for reproducibility (ignored if rng is given)
        rng: Optional random generator to draw from
        max_attempts: Random positions tried per word before giving up on it

    Returns:
        GenerationResult with the filled grid, one placement per placed word,
        and the words that could not be placed
    """
    words = normalize_words(words)
    if rng is None:
        rng = random.Random(seed)

    grid = empty_grid(size)
    placements: List[WordPlacement] = []
    unplaced: List[str] = []

    for word in words:
        placement = None
        for _ in range(max_attempts):
            direction = rng.choice(DIRECTIONS)
            row = rng.randrange(size)
            col = rng.randrange(size)

            if can_place(grid, word, row, col, direction):
                placement = place_word(grid, word, row, col, direction)
                break

        if placement is None:
            logger.warning(
                "Could not place '%s' on a %dx%d grid after %d attempts; dropping it",
                word, size, size, max_attempts,
            )
            unplaced.append(word)
        else:
            placements.append(placement)

    fill_blanks(grid, rng)

    return GenerationResult(size=size, grid=grid, placements=placements, unplaced=unplaced)


def generate_complete(
    words: Sequence[str],
    size: int = GRID_SIZE,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_ATTEMPTS,
    layout_retries: int = 3,
) -> GenerationResult:
    """
    Generate a grid, starting over with a fresh layout while words are dropped.

    Returns the first layout that places every word, or after layout_retries
    extra layouts, the one that placed the most words.
    """
    if rng is None:
        rng = random.Random(seed)

    best: Optional[GenerationResult] = None
    for layout in range(layout_retries + 1):
        result = generate(words, size=size, rng=rng, max_attempts=max_attempts)
        if not result.unplaced:
            return result
        if best is None or len(result.unplaced) < len(best.unplaced):
            best = result
        logger.info("Layout %d dropped %d word(s), retrying", layout + 1, len(result.unplaced))

    return best
