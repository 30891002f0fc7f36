"""
Pydantic models for the environment layer.

This module contains the configuration and result models used around the
games. The main logic classes (WordSearchSession, ColorMatchSession,
SimonSession, QuickMathSession, GameCoordinator, PointsLedger, BestTimes)
remain in their respective files.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field

from ..wordsearch.models import Coordinate, WordPlacement
from ..wordsearch.matcher import ScoringRules


# Type aliases
Outcome = Literal["all_found", "time_up"]
SimonState = Literal["waiting", "playing", "gameover", "complete"]
Difficulty = Literal["easy", "medium", "hard"]


class SessionConfig(BaseModel):
    """Configuration for a single word search session."""
    category: str = "animals"
    grid_size: int = Field(default=12, ge=4, le=30)
    time_limit: int = Field(default=300, ge=1)
    max_hints: int = Field(default=2, ge=0)
    hint_letters: int = Field(default=2, ge=1)
    words_per_game: int = Field(default=6, ge=1)
    max_attempts: int = Field(default=100, ge=1)
    layout_retries: int = Field(default=3, ge=0)
    completion_bonus: int = Field(default=0, ge=0)
    seed: Optional[int] = None
    scoring: ScoringRules = Field(default_factory=ScoringRules)


class ColorMatchConfig(BaseModel):
    """Configuration for the color matching game."""
    base_pairs: int = Field(default=4, ge=1)
    points_per_match: int = Field(default=10, ge=0)
    level_bonus: int = Field(default=20, ge=0)
    efficiency_start: int = Field(default=50, ge=0)
    efficiency_floor: int = Field(default=10, ge=0)
    seed: Optional[int] = None


class SimonConfig(BaseModel):
    """Configuration for the Simon sequence game."""
    num_colors: int = Field(default=4, ge=2)
    max_level: int = Field(default=10, ge=1)
    points_per_level: int = Field(default=10, ge=0)
    completion_bonus: int = Field(default=100, ge=0)
    seed: Optional[int] = None


class QuickMathConfig(BaseModel):
    """Configuration for the quick math game."""
    total_questions: int = Field(default=15, ge=1)
    time_per_question: int = Field(default=10, ge=1)
    medium_streak: int = Field(default=5, ge=0)
    hard_streak: int = Field(default=10, ge=0)
    streak_bonus: int = Field(default=10, ge=0)
    seed: Optional[int] = None


class GameConfig(BaseModel):
    """Top-level configuration: per-game settings plus where records live."""
    session: SessionConfig = Field(default_factory=SessionConfig)
    color_match: ColorMatchConfig = Field(default_factory=ColorMatchConfig)
    simon: SimonConfig = Field(default_factory=SimonConfig)
    quick_math: QuickMathConfig = Field(default_factory=QuickMathConfig)
    store_path: Optional[str] = None


class Question(BaseModel):
    """A multiple-choice arithmetic question."""
    text: str
    answer: int
    options: List[int] = Field(default_factory=list)
    difficulty: Difficulty = "easy"


class AnswerResult(BaseModel):
    """Outcome of answering one quick math question."""
    correct: bool = False
    answer: Optional[int] = None
    correct_answer: Optional[int] = None
    points: int = 0
    timed_out: bool = False


class PointEvent(BaseModel):
    """A single points award sent to the ledger."""
    points: int
    source: str
    reason: str = ""


class SessionResult(BaseModel):
    """Result of a word search session."""
    category: str
    words: List[str] = Field(default_factory=list)
    unplaced_words: List[str] = Field(default_factory=list)
    found_words: List[str] = Field(default_factory=list)
    score: int = 0
    time_remaining: int = 0
    elapsed_ms: int = 0
    hints_used: int = 0
    is_complete: bool = False
    outcome: Optional[Outcome] = None
    best_time_ms: Optional[int] = None
    new_record: bool = False
    placements: List[WordPlacement] = Field(default_factory=list)
    grid: Optional[str] = None


class HintResult(BaseModel):
    """Cells highlighted by a hint."""
    word: Optional[str] = None
    cells: List[Coordinate] = Field(default_factory=list)
    hints_remaining: int = 0


class CoordinatorState(BaseModel):
    """Snapshot of the coordinator: totals and per-session results."""
    total_points: int = 0
    sessions_played: int = 0
    best_times: Dict[str, int] = Field(default_factory=dict)
    color_match_records: Dict[int, int] = Field(default_factory=dict)
