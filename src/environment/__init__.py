"""Game environment around the word search engine."""

from .models import (
    Outcome,
    SimonState,
    Difficulty,
    SessionConfig,
    ColorMatchConfig,
    SimonConfig,
    QuickMathConfig,
    GameConfig,
    Question,
    AnswerResult,
    PointEvent,
    SessionResult,
    HintResult,
    CoordinatorState,
)
from .categories import WORDS_BY_CATEGORY, get_words
from .points import PointSink, PointsLedger
from .store import KeyValueStore, MemoryStore, JsonFileStore, BestTimes, best_time_key
from .session import WordSearchSession
from .colormatch import ColorMatchSession, ColorItem, COLOR_NAMES
from .simon import SimonSession, SIMON_COLORS
from .quickmath import QuickMathSession, generate_question, speed_bonus
from .coordinator import GameCoordinator

__all__ = [
    "Outcome",
    "SimonState",
    "Difficulty",
    "SessionConfig",
    "ColorMatchConfig",
    "SimonConfig",
    "QuickMathConfig",
    "GameConfig",
    "Question",
    "AnswerResult",
    "PointEvent",
    "SessionResult",
    "HintResult",
    "CoordinatorState",
    "WORDS_BY_CATEGORY",
    "get_words",
    "PointSink",
    "PointsLedger",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "BestTimes",
    "best_time_key",
    "WordSearchSession",
    "ColorMatchSession",
    "ColorItem",
    "COLOR_NAMES",
    "SimonSession",
    "SIMON_COLORS",
    "QuickMathSession",
    "generate_question",
    "speed_bonus",
    "GameCoordinator",
]
