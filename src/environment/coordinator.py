"""
Top-level owner of cross-game state.

The coordinator holds the points ledger and the record store. Each game it
creates gets the ledger injected as its point sink, so the running total
lives in exactly one place. Every game keeps its best times under its own
key prefix in the shared store.
"""

from typing import List, Optional

from .categories import WORDS_BY_CATEGORY
from .colormatch import SOURCE as COLOR_MATCH, COLOR_NAMES, ColorMatchSession, level_key
from .models import (
    ColorMatchConfig,
    CoordinatorState,
    GameConfig,
    QuickMathConfig,
    SessionConfig,
    SimonConfig,
)
from .points import PointsLedger
from .quickmath import SOURCE as QUICK_MATH, QuickMathSession
from .session import WordSearchSession
from .simon import SOURCE as SIMON, SimonSession
from .store import BestTimes, JsonFileStore, KeyValueStore, MemoryStore


def _with_seed(config, seed: Optional[int]):
    if seed is None:
        return config.model_copy()
    return config.model_copy(update={"seed": seed})


class GameCoordinator:
    """
    Creates game sessions and aggregates their points.

    Attributes:
        config: Game configuration
        store: Key-value store for persisted records
        ledger: Running points total across all games
        best_times: Best completion times for word search levels
        sessions: Word search sessions created so far
    """

    def __init__(self, config: Optional[GameConfig] = None, store: Optional[KeyValueStore] = None):
        self.config = config or GameConfig()

        if store is None:
            store = JsonFileStore(self.config.store_path) if self.config.store_path else MemoryStore()

        self.store = store
        self.ledger = PointsLedger()
        self.best_times = BestTimes(store, game="wordsearch")
        self.color_match_times = BestTimes(store, game=COLOR_MATCH)
        self.simon_times = BestTimes(store, game=SIMON)
        self.quick_math_times = BestTimes(store, game=QUICK_MATH)
        self.sessions: List[WordSearchSession] = []

    @property
    def total_points(self) -> int:
        return self.ledger.total

    def new_session(self, category: Optional[str] = None, seed: Optional[int] = None) -> WordSearchSession:
        """
        Create a word search session wired to the ledger and best-time record.

        Args:
            category: Category override (defaults to the configured one)
            seed: Seed override for reproducible grids
        """
        updates = {}
        if category is not None:
            updates["category"] = category
        if seed is not None:
            updates["seed"] = seed

        session_config = SessionConfig(**{**self.config.session.model_dump(), **updates})
        session = WordSearchSession.create(
            config=session_config,
            sink=self.ledger,
            best_times=self.best_times,
        )
        self.sessions.append(session)
        return session

    def new_color_match(self, seed: Optional[int] = None) -> ColorMatchSession:
        config: ColorMatchConfig = _with_seed(self.config.color_match, seed)
        return ColorMatchSession.create(
            config=config, sink=self.ledger, best_times=self.color_match_times
        )

    def new_simon(self, seed: Optional[int] = None) -> SimonSession:
        config: SimonConfig = _with_seed(self.config.simon, seed)
        return SimonSession.create(config=config, sink=self.ledger, best_times=self.simon_times)

    def new_quick_math(self, seed: Optional[int] = None) -> QuickMathSession:
        config: QuickMathConfig = _with_seed(self.config.quick_math, seed)
        return QuickMathSession.create(
            config=config, sink=self.ledger, best_times=self.quick_math_times
        )

    def get_state(self) -> CoordinatorState:
        best = {}
        for category in WORDS_BY_CATEGORY:
            value = self.best_times.get(category)
            if value is not None:
                best[category] = value

        color_records = {}
        max_level = len(COLOR_NAMES) - self.config.color_match.base_pairs + 1
        for level in range(1, max(max_level, 1) + 1):
            value = self.color_match_times.get(level_key(level))
            if value is not None:
                color_records[level] = value

        return CoordinatorState(
            total_points=self.total_points,
            sessions_played=sum(1 for s in self.sessions if s.is_complete),
            best_times=best,
            color_match_records=color_records,
        )
