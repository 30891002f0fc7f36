"""Word search puzzle engine."""

from .models import (
    Direction,
    direction_vector,
    Coordinate,
    Cell,
    Grid,
    WordPlacement,
    GenerationResult,
    MatchResult,
)
from .grid import empty_grid, in_bounds, read_letters, placement_letters, render_grid
from .generator import generate, generate_complete, can_place, place_word, GRID_SIZE, MAX_ATTEMPTS
from .selection import compute_line, apply_selection, clear_selection, SelectionTracker
from .matcher import verify, score_word, time_bonus, ScoringRules

__all__ = [
    # Models
    "Direction",
    "direction_vector",
    "Coordinate",
    "Cell",
    "Grid",
    "WordPlacement",
    "GenerationResult",
    "MatchResult",
    # Grid utilities
    "empty_grid",
    "in_bounds",
    "read_letters",
    "placement_letters",
    "render_grid",
    # Generation
    "generate",
    "generate_complete",
    "can_place",
    "place_word",
    "GRID_SIZE",
    "MAX_ATTEMPTS",
    # Selection
    "compute_line",
    "apply_selection",
    "clear_selection",
    "SelectionTracker",
    # Matching
    "verify",
    "score_word",
    "time_bonus",
    "ScoringRules",
]
