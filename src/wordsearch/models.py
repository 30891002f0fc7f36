"""Data models for the word search engine."""

from enum import Enum
from typing import List, Optional, NamedTuple, Tuple
from pydantic import BaseModel, Field


class Direction(str, Enum):
    """Directions a word can be laid out along."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_DOWN = "diagonalDown"
    DIAGONAL_UP = "diagonalUp"


def direction_vector(direction: Direction) -> Tuple[int, int]:
    """Return the (d_row, d_col) step for a direction."""
    if direction is Direction.HORIZONTAL:
        return (0, 1)
    elif direction is Direction.VERTICAL:
        return (1, 0)
    elif direction is Direction.DIAGONAL_DOWN:
        return (1, 1)
    elif direction is Direction.DIAGONAL_UP:
        return (-1, 1)
    raise ValueError(f"Unknown direction: {direction!r}")


class Coordinate(NamedTuple):
    """A cell position on the grid."""
    row: int
    col: int


class Cell(BaseModel):
    """A single letter cell on the grid."""
    letter: str = Field(default="", max_length=1)
    is_selected: bool = False
    is_part_of_word: bool = False
    is_found_word: bool = False
    found_word_index: Optional[int] = Field(None, ge=0)


Grid = List[List[Cell]]


class WordPlacement(BaseModel):
    """Where a target word was laid out on the grid."""
    word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    start_row: int = Field(..., ge=0)
    start_col: int = Field(..., ge=0)
    direction: Direction
    found: bool = False

    def cells(self) -> List[Coordinate]:
        """Coordinates covered by the word, first letter first."""
        d_row, d_col = direction_vector(self.direction)
        return [
            Coordinate(self.start_row + i * d_row, self.start_col + i * d_col)
            for i in range(len(self.word))
        ]


class GenerationResult(BaseModel):
    """Output of the grid generator."""
    size: int
    grid: Grid
    placements: List[WordPlacement] = Field(default_factory=list)
    unplaced: List[str] = Field(default_factory=list)

    @property
    def placed_words(self) -> List[str]:
        return [p.word for p in self.placements]


class MatchResult(BaseModel):
    """Result of checking a released selection against the target words."""
    matched: Optional[str] = None
    forward: str = ""
    reversed: str = ""
    points: int = 0
    found_word_index: Optional[int] = None
    already_found: bool = False
    cells: List[Coordinate] = Field(default_factory=list)
