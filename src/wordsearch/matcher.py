"""
Match verification for released selections.

A selection matches a target word when its letters spell the word either
forwards or backwards. Each word can be found once; finding it marks the
selected cells, flips the word's placement to found and scores
10 points per letter plus a bonus for finding it early.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from .grid import in_bounds, read_letters
from .models import Coordinate, Grid, MatchResult, WordPlacement
from .selection import clear_selection


logger = logging.getLogger(__name__)


class ScoringRules(BaseModel):
    """Point values for found words."""
    points_per_letter: int = Field(default=10, ge=0)
    # (seconds remaining must exceed, bonus) from highest threshold down
    time_bonus_tiers: List[Tuple[int, int]] = Field(
        default_factory=lambda: [(240, 20), (120, 10)]
    )


DEFAULT_SCORING = ScoringRules()


def time_bonus(time_remaining: int, rules: ScoringRules = DEFAULT_SCORING) -> int:
    """Bonus for the first tier whose threshold is exceeded."""
    for threshold, bonus in sorted(rules.time_bonus_tiers, reverse=True):
        if time_remaining > threshold:
            return bonus
    return 0


def score_word(word: str, time_remaining: int, rules: ScoringRules = DEFAULT_SCORING) -> int:
    """Points for finding a word with time_remaining seconds left."""
    return rules.points_per_letter * len(word) + time_bonus(time_remaining, rules)


def verify(
    selected_cells: Sequence[Coordinate],
    grid: Grid,
    target_words: Sequence[str],
    found_words: List[str],
    placements: Optional[List[WordPlacement]] = None,
    time_remaining: int = 300,
    scoring: Optional[ScoringRules] = None,
) -> MatchResult:
    """
    Check a released selection against the target words.

    On a match, found_words, the word's placement and the grid cells are
    updated in place. Otherwise the selection highlight is cleared and
    nothing else changes.

    Args:
        selected_cells: Cells under the drag, in drag order
        grid: The game grid
        target_words: Words the player is looking for
        found_words: Words found so far, in the order they were found
        placements: Optional placements to flag as found
        time_remaining: Seconds left on the clock, for the time bonus
        scoring: Point values, defaults to ScoringRules()

    Returns:
        MatchResult describing the matched word (if any) and points earned
    """
    rules = scoring or DEFAULT_SCORING
    size = len(grid)
    cells = [Coordinate(*c) for c in selected_cells if in_bounds(size, c)]

    forward = read_letters(grid, cells)
    backward = forward[::-1]

    candidates = [w for w in target_words if w == forward or w == backward] if cells else []
    matched = next((w for w in candidates if w not in found_words), None)

    if matched is None:
        clear_selection(grid)
        return MatchResult(
            forward=forward,
            reversed=backward,
            already_found=bool(candidates),
            cells=cells,
        )

    found_word_index = len(found_words)
    found_words.append(matched)

    for placement in placements or []:
        if placement.word == matched and not placement.found:
            placement.found = True
            break

    for row, col in cells:
        cell = grid[row][col]
        cell.is_selected = False
        cell.is_found_word = True
        cell.found_word_index = found_word_index

    points = score_word(matched, time_remaining, rules)
    logger.debug("Found '%s' (%d points, %ds left)", matched, points, time_remaining)

    return MatchResult(
        matched=matched,
        forward=forward,
        reversed=backward,
        points=points,
        found_word_index=found_word_index,
        cells=cells,
    )
