import logging
import random
from typing import List, Dict, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from ..wordsearch.generator import generate_complete
from ..wordsearch.grid import render_grid
from ..wordsearch.matcher import verify
from ..wordsearch.models import Coordinate, Grid, MatchResult, WordPlacement
from ..wordsearch.selection import SelectionTracker, apply_selection, clear_selection
from .categories import get_words
from .models import HintResult, Outcome, SessionConfig, SessionResult
from .points import PointSink
from .store import BestTimes


logger = logging.getLogger(__name__)

SOURCE = "wordsearch"


class WordSearchSession(BaseModel):
    """
    Manages a single word search game.

    Owns the grid for one round, the countdown, hints, score and the found
    words. Points are sent to an injected PointSink as they are earned and
    best completion times go through an injected BestTimes record.

    Attributes:
        config: Session configuration
        category: Word category the targets come from
        words: Target words that were placed on the grid
        unplaced_words: Words that could not be placed and are not playable
        found_words: Words found so far, in order
        score: Points earned this round
        time_remaining: Seconds left on the clock
        hints_used: Hints used this round
        is_started: Whether a round is in progress or finished
        is_complete: Whether the round has ended
        outcome: How the round ended
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SessionConfig = Field(default_factory=SessionConfig)
    category: str = "animals"
    words: List[str] = Field(default_factory=list)
    unplaced_words: List[str] = Field(default_factory=list)
    found_words: List[str] = Field(default_factory=list)
    placements: List[WordPlacement] = Field(default_factory=list)
    grid: Grid = Field(default_factory=list)
    score: int = 0
    time_remaining: int = 0
    hints_used: int = 0
    hint_cells: List[Coordinate] = Field(default_factory=list)
    is_started: bool = False
    is_complete: bool = False
    outcome: Optional[Outcome] = None
    best_time_ms: Optional[int] = None
    new_record: bool = False
    _rng: random.Random = None
    _tracker: Optional[SelectionTracker] = None
    _sink: Optional[PointSink] = None
    _best_times: Optional[BestTimes] = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator and the clock after model creation."""
        self._rng = random.Random(self.config.seed)
        if not self.is_started:
            self.time_remaining = self.config.time_limit

    @classmethod
    def create(
        cls,
        config: Optional[SessionConfig] = None,
        sink: Optional[PointSink] = None,
        best_times: Optional[BestTimes] = None,
        **config_kwargs: Any
    ) -> "WordSearchSession":
        """
        Factory method to create a session with its collaborators.

        Args:
            config: Optional SessionConfig instance
            sink: Where earned points are sent
            best_times: Record of best completion times per category
            **config_kwargs: Config parameters if config not provided

        Returns:
            A new, not yet started session
        """
        if config is None:
            config = SessionConfig(**config_kwargs)

        get_words(config.category)

        session = cls(config=config, category=config.category)
        session._sink = sink
        session._best_times = best_times
        return session

    @property
    def is_running(self) -> bool:
        return self.is_started and not self.is_complete

    @property
    def elapsed_ms(self) -> int:
        return (self.config.time_limit - self.time_remaining) * 1000

    @property
    def hints_remaining(self) -> int:
        return max(0, self.config.max_hints - self.hints_used)

    @property
    def selection(self) -> List[Coordinate]:
        return list(self._tracker.cells) if self._tracker else []

    def set_category(self, category: str) -> None:
        """Switch category and drop any round in progress."""
        get_words(category)
        self.category = category
        self._reset()
        self.is_started = False

    def _reset(self) -> None:
        self.words = []
        self.unplaced_words = []
        self.found_words = []
        self.placements = []
        self.grid = []
        self.score = 0
        self.time_remaining = self.config.time_limit
        self.hints_used = 0
        self.hint_cells = []
        self.is_complete = False
        self.outcome = None
        self.new_record = False
        self._tracker = None

    def start(self) -> None:
        """
        Start a new round (also used for "play again").

        Raises:
            ValueError: If none of the category's words fit on the grid
        """
        self._reset()

        targets = get_words(self.category, self.config.words_per_game)
        result = generate_complete(
            targets,
            size=self.config.grid_size,
            rng=self._rng,
            max_attempts=self.config.max_attempts,
            layout_retries=self.config.layout_retries,
        )

        if not result.placements:
            raise ValueError(
                f"None of the '{self.category}' words fit on a "
                f"{self.config.grid_size}x{self.config.grid_size} grid"
            )

        if result.unplaced:
            logger.warning(
                "Removed unplaceable words from '%s' round: %s",
                self.category, ", ".join(result.unplaced),
            )

        self.grid = result.grid
        self.placements = result.placements
        self.words = result.placed_words
        self.unplaced_words = result.unplaced
        self._tracker = SelectionTracker(self.grid)
        self.best_time_ms = self._best_times.get(self.category) if self._best_times else None
        self.is_started = True

        logger.info(
            "Started '%s' round with %d words, %ds on the clock",
            self.category, len(self.words), self.time_remaining,
        )

    def press(self, coord: Coordinate) -> List[Coordinate]:
        """Begin a drag on a cell."""
        if not self.is_running:
            return []

        self.clear_hint()
        return self._tracker.begin(coord)

    def enter(self, coord: Coordinate) -> List[Coordinate]:
        """Extend the active drag to a cell."""
        if not self.is_running:
            return []

        return self._tracker.extend(coord)

    def release(self) -> MatchResult:
        """
        End the active drag and check the selection.

        Returns:
            MatchResult for the selection (empty if no drag was active)
        """
        if not self.is_running or not self._tracker.active:
            return MatchResult()

        cells = self._tracker.release()
        result = verify(
            cells,
            self.grid,
            self.words,
            self.found_words,
            placements=self.placements,
            time_remaining=self.time_remaining,
            scoring=self.config.scoring,
        )

        if result.matched:
            self._award(result.points, f"found {result.matched}")
            if len(self.found_words) == len(self.words):
                self._complete("all_found")

        return result

    def select(self, start: Coordinate, end: Coordinate) -> MatchResult:
        """Press, drag and release in one call."""
        self.press(start)
        self.enter(end)
        return self.release()

    def tick(self, seconds: int = 1) -> None:
        """Advance the countdown; the round ends when it reaches zero."""
        if not self.is_running:
            return

        self.time_remaining = max(0, self.time_remaining - max(0, seconds))
        if self.time_remaining == 0:
            self._complete("time_up")

    def use_hint(self) -> HintResult:
        """
        Highlight the first letters of a random word not yet found.

        Does nothing once all hints are used, all words are found, or the
        round is not running.
        """
        if not self.is_running or self.hints_used >= self.config.max_hints:
            return HintResult(hints_remaining=self.hints_remaining)

        unfound = [p for p in self.placements if not p.found]
        if not unfound:
            return HintResult(hints_remaining=self.hints_remaining)

        placement = self._rng.choice(unfound)
        cells = [
            c for c in placement.cells()[:self.config.hint_letters]
            if not self.grid[c.row][c.col].is_found_word
        ]

        self._tracker.cancel()
        apply_selection(self.grid, cells)
        self.hint_cells = cells
        self.hints_used += 1

        return HintResult(word=placement.word, cells=cells, hints_remaining=self.hints_remaining)

    def clear_hint(self) -> None:
        """Remove a hint highlight."""
        if self.hint_cells:
            clear_selection(self.grid)
            self.hint_cells = []

    def _award(self, points: int, reason: str) -> None:
        self.score += points
        if self._sink is not None:
            self._sink.add_points(points, SOURCE, reason)

    def _complete(self, outcome: Outcome) -> None:
        self.is_complete = True
        self.outcome = outcome
        self.hint_cells = []
        if self._tracker is not None:
            self._tracker.cancel()

        if outcome == "all_found":
            if self._best_times is not None:
                self.new_record = self._best_times.record(self.category, self.elapsed_ms)
                if self.new_record:
                    self.best_time_ms = self.elapsed_ms
            self._award(self.config.completion_bonus, "all words found")
        else:
            self._award(0, "time's up")

        logger.info(
            "'%s' round over (%s): %d/%d words, %d points",
            self.category, outcome, len(self.found_words), len(self.words), self.score,
        )

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "category": self.category,
            "words": list(self.words),
            "found_words": list(self.found_words),
            "score": self.score,
            "time_remaining": self.time_remaining,
            "hints_used": self.hints_used,
            "hints_remaining": self.hints_remaining,
            "is_started": self.is_started,
            "is_complete": self.is_complete,
            "outcome": self.outcome,
        }

    def get_result(self) -> SessionResult:
        """Get the result of the current (or last) round."""
        return SessionResult(
            category=self.category,
            words=list(self.words),
            unplaced_words=list(self.unplaced_words),
            found_words=list(self.found_words),
            score=self.score,
            time_remaining=self.time_remaining,
            elapsed_ms=self.elapsed_ms if self.is_started else 0,
            hints_used=self.hints_used,
            is_complete=self.is_complete,
            outcome=self.outcome,
            best_time_ms=self.best_time_ms,
            new_record=self.new_record,
            placements=[p.model_copy() for p in self.placements],
            grid=render_grid(self.grid, highlight_found=True) if self.grid else None,
        )
