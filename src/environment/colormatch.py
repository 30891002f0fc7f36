"""
Color matching game.

Each level shows the same colors in two columns, the right one shuffled.
The player picks one color on each side; equal names are matched. Level n
uses 3 + n colors (capped by the palette). Completing a level scores
10 per match, 20 per level and an efficiency bonus that shrinks with every
attempt, and the completion time is kept as the level record.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from .models import ColorMatchConfig
from .points import PointSink
from .store import BestTimes


logger = logging.getLogger(__name__)

SOURCE = "colormatch"

COLOR_NAMES: List[str] = [
    "Rojo", "Azul", "Verde", "Amarillo", "Morado", "Rosa", "Naranja", "Celeste",
]


def level_key(level: int) -> str:
    return f"level_{level}"


class ColorItem(BaseModel):
    """One color card in a column."""
    name: str
    matched: bool = False


class ColorMatchSession(BaseModel):
    """
    Manages the color matching game, one level at a time.

    Attributes:
        config: Game configuration
        level: Current level, starting at 1
        left: Colors in palette order
        right: The same colors, shuffled
        selected_left: Index of the picked left card, if any
        selected_right: Index of the picked right card, if any
        matches: Pairs matched this level
        attempts: Pairs checked this level
        is_complete: Whether the current level is finished
        record_ms: Best completion time for the level
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: ColorMatchConfig = Field(default_factory=ColorMatchConfig)
    level: int = Field(default=1, ge=1)
    left: List[ColorItem] = Field(default_factory=list)
    right: List[ColorItem] = Field(default_factory=list)
    selected_left: Optional[int] = None
    selected_right: Optional[int] = None
    matches: int = 0
    attempts: int = 0
    score: int = 0
    is_complete: bool = False
    elapsed_ms: int = 0
    record_ms: Optional[int] = None
    new_record: bool = False
    _rng: random.Random = None
    _clock: Callable[[], float] = None
    _started_at: float = 0.0
    _sink: Optional[PointSink] = None
    _best_times: Optional[BestTimes] = None

    def model_post_init(self, __context) -> None:
        self._rng = random.Random(self.config.seed)
        self._clock = time.monotonic

    @classmethod
    def create(
        cls,
        config: Optional[ColorMatchConfig] = None,
        sink: Optional[PointSink] = None,
        best_times: Optional[BestTimes] = None,
        clock: Optional[Callable[[], float]] = None,
        **config_kwargs: Any
    ) -> "ColorMatchSession":
        """
        Factory method to create a game with its collaborators.

        Args:
            config: Optional ColorMatchConfig instance
            sink: Where earned points are sent
            best_times: Record of best completion times per level
            clock: Seconds counter used to time levels (defaults to time.monotonic)
            **config_kwargs: Config parameters if config not provided
        """
        if config is None:
            config = ColorMatchConfig(**config_kwargs)

        session = cls(config=config)
        session._sink = sink
        session._best_times = best_times
        if clock is not None:
            session._clock = clock
        return session

    @property
    def num_pairs(self) -> int:
        return min(self.config.base_pairs + self.level - 1, len(COLOR_NAMES))

    def start(self) -> None:
        """Deal the current level and start its timer."""
        names = COLOR_NAMES[:self.num_pairs]
        self.left = [ColorItem(name=n) for n in names]
        self.right = [ColorItem(name=n) for n in names]
        self._rng.shuffle(self.right)

        self.selected_left = None
        self.selected_right = None
        self.matches = 0
        self.attempts = 0
        self.score = 0
        self.is_complete = False
        self.elapsed_ms = 0
        self.new_record = False
        self.record_ms = self._best_times.get(level_key(self.level)) if self._best_times else None
        self._started_at = self._clock()

    def next_level(self) -> None:
        self.level += 1
        self.start()

    def reset(self) -> None:
        """Go back to level 1."""
        self.level = 1
        self.start()

    def shuffle_right(self) -> bool:
        """Reshuffle the right column; not allowed while a card is picked."""
        if self.selected_left is not None or self.selected_right is not None:
            return False

        self._rng.shuffle(self.right)
        return True

    def select_left(self, index: int) -> Optional[bool]:
        """Pick (or unpick) a left card. Returns the match result once both sides are picked."""
        return self._select(self.left, "selected_left", index)

    def select_right(self, index: int) -> Optional[bool]:
        """Pick (or unpick) a right card. Returns the match result once both sides are picked."""
        return self._select(self.right, "selected_right", index)

    def _select(self, column: List[ColorItem], attr: str, index: int) -> Optional[bool]:
        if self.is_complete or not 0 <= index < len(column) or column[index].matched:
            return None

        setattr(self, attr, None if getattr(self, attr) == index else index)

        if self.selected_left is None or self.selected_right is None:
            return None
        return self._check_pair()

    def _check_pair(self) -> bool:
        # The efficiency bonus counts the attempts made before the final match
        previous_attempts = self.attempts
        self.attempts += 1

        left = self.left[self.selected_left]
        right = self.right[self.selected_right]
        matched = left.name == right.name

        if matched:
            left.matched = True
            right.matched = True
            self.matches += 1

        self.selected_left = None
        self.selected_right = None

        if matched and self.matches == self.num_pairs:
            self._complete(previous_attempts)

        return matched

    def points_for_level(self, previous_attempts: int) -> int:
        efficiency = max(self.config.efficiency_start - previous_attempts, self.config.efficiency_floor)
        return (
            self.matches * self.config.points_per_match
            + self.level * self.config.level_bonus
            + efficiency
        )

    def _complete(self, previous_attempts: int) -> None:
        self.is_complete = True
        self.elapsed_ms = int((self._clock() - self._started_at) * 1000)

        if self._best_times is not None:
            self.new_record = self._best_times.record(level_key(self.level), self.elapsed_ms)
            if self.new_record:
                self.record_ms = self.elapsed_ms

        self.score = self.points_for_level(previous_attempts)
        if self._sink is not None:
            self._sink.add_points(self.score, SOURCE, f"level {self.level} complete")

        logger.info(
            "Color match level %d done in %dms with %d attempts (%d points)",
            self.level, self.elapsed_ms, self.attempts, self.score,
        )

    def get_state(self) -> dict:
        return {
            "level": self.level,
            "num_pairs": self.num_pairs,
            "matches": self.matches,
            "attempts": self.attempts,
            "score": self.score,
            "is_complete": self.is_complete,
            "elapsed_ms": self.elapsed_ms,
            "record_ms": self.record_ms,
        }
