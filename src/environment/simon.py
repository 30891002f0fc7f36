"""
Simon sequence game.

Every level adds one random color to the sequence and the player repeats
the whole sequence. A wrong press ends the game. Clearing a level adds
10 points per level number; clearing the last level sends the total plus a
completion bonus to the point sink.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from .models import SimonConfig, SimonState
from .points import PointSink
from .store import BestTimes


logger = logging.getLogger(__name__)

SOURCE = "simon"

SIMON_COLORS: List[str] = ["Rojo", "Verde", "Azul", "Amarillo"]


class SimonSession(BaseModel):
    """
    Manages a Simon game.

    The caller plays the sequence back to the player between
    begin_playback() and end_playback(); presses during playback are
    ignored.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SimonConfig = Field(default_factory=SimonConfig)
    sequence: List[int] = Field(default_factory=list)
    player_sequence: List[int] = Field(default_factory=list)
    level: int = 1
    score: int = 0
    state: SimonState = "waiting"
    is_showing: bool = False
    elapsed_ms: int = 0
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
        config: Optional[SimonConfig] = None,
        sink: Optional[PointSink] = None,
        best_times: Optional[BestTimes] = None,
        clock: Optional[Callable[[], float]] = None,
        **config_kwargs: Any
    ) -> "SimonSession":
        """Factory method to create a game with its collaborators."""
        if config is None:
            config = SimonConfig(**config_kwargs)

        session = cls(config=config)
        session._sink = sink
        session._best_times = best_times
        if clock is not None:
            session._clock = clock
        return session

    @property
    def record_key(self) -> str:
        return f"levels_{self.config.max_level}"

    def _add_color(self) -> None:
        self.sequence.append(self._rng.randrange(self.config.num_colors))
        self.player_sequence = []

    def start(self) -> None:
        """Start from level 1 with a one-color sequence."""
        self.reset()
        self.state = "playing"
        self._started_at = self._clock()
        self._add_color()

    def reset(self) -> None:
        """Back to the waiting screen."""
        self.sequence = []
        self.player_sequence = []
        self.level = 1
        self.score = 0
        self.state = "waiting"
        self.is_showing = False
        self.elapsed_ms = 0
        self.new_record = False

    def begin_playback(self) -> List[int]:
        """Mark the sequence as being shown and return it."""
        if self.state == "playing":
            self.is_showing = True
            self.player_sequence = []
        return list(self.sequence)

    def end_playback(self) -> None:
        self.is_showing = False

    def press(self, color: int) -> Optional[bool]:
        """
        Register a color press.

        Returns:
            False on a wrong press, True on a correct one, None if ignored
        """
        if self.is_showing or self.state != "playing":
            return None
        if not 0 <= color < self.config.num_colors:
            return None

        self.player_sequence.append(color)
        position = len(self.player_sequence) - 1

        if self.sequence[position] != color:
            self.state = "gameover"
            logger.info("Simon over at level %d with %d points", self.level, self.score)
            if self._sink is not None:
                self._sink.add_points(0, SOURCE, "game over")
            return False

        if len(self.player_sequence) == len(self.sequence):
            self.score += self.level * self.config.points_per_level
            if self.level >= self.config.max_level:
                self._complete()
            else:
                self.level += 1
                self._add_color()

        return True

    def _complete(self) -> None:
        self.state = "complete"
        self.elapsed_ms = int((self._clock() - self._started_at) * 1000)

        if self._best_times is not None:
            self.new_record = self._best_times.record(self.record_key, self.elapsed_ms)

        if self._sink is not None:
            self._sink.add_points(
                self.score + self.config.completion_bonus, SOURCE, "all levels complete"
            )

        logger.info("Simon complete: %d points in %dms", self.score, self.elapsed_ms)

    def get_state(self) -> dict:
        return {
            "level": self.level,
            "sequence_length": len(self.sequence),
            "progress": len(self.player_sequence),
            "score": self.score,
            "state": self.state,
        }
