"""
Quick math quiz.

Fifteen multiple-choice questions, ten seconds each. Difficulty rises with
the streak of correct answers: addition and subtraction, then times tables,
then three-term sums. Correct answers score by difficulty plus bonuses for
answering fast and for keeping a streak.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from .models import AnswerResult, Difficulty, Question, QuickMathConfig
from .points import PointSink
from .store import BestTimes


logger = logging.getLogger(__name__)

SOURCE = "quickmath"

BASE_POINTS = {"easy": 10, "medium": 20, "hard": 30}
NUM_OPTIONS = 4


def generate_question(difficulty: Difficulty, rng: random.Random) -> Question:
    """Build a question with one correct and three distinct positive wrong options."""
    if difficulty == "easy":
        a = rng.randint(1, 10)
        b = rng.randint(1, 10)
        if rng.random() > 0.5:
            text, answer = f"{a} + {b} = ?", a + b
        else:
            larger, smaller = max(a, b), min(a, b)
            text, answer = f"{larger} - {smaller} = ?", larger - smaller
    elif difficulty == "medium":
        c = rng.randint(1, 12)
        d = rng.randint(1, 12)
        if rng.random() > 0.5:
            text, answer = f"{c} × {d} = ?", c * d
        else:
            text, answer = f"{c * d} ÷ {c} = ?", d
    elif difficulty == "hard":
        e = rng.randint(5, 19)
        f = rng.randint(5, 19)
        g = rng.randint(1, 10)
        text, answer = f"{e} + {f} - {g} = ?", e + f - g
    else:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")

    options = [answer]
    while len(options) < NUM_OPTIONS:
        wrong = answer + rng.randint(-10, 9)
        if wrong != answer and wrong > 0 and wrong not in options:
            options.append(wrong)
    rng.shuffle(options)

    return Question(text=text, answer=answer, options=options, difficulty=difficulty)


def speed_bonus(time_left: int) -> int:
    if time_left > 7:
        return 5
    if time_left > 4:
        return 3
    return 0


class QuickMathSession(BaseModel):
    """
    Manages a quick math quiz.

    Attributes:
        config: Quiz configuration
        question: The question on screen
        question_number: 1-based number of the current question
        score: Points earned this quiz
        streak: Consecutive correct answers
        time_left: Seconds left for the current question
        is_active: Whether questions are being asked
        is_complete: Whether all questions have been answered
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: QuickMathConfig = Field(default_factory=QuickMathConfig)
    question: Optional[Question] = None
    question_number: int = 0
    score: int = 0
    streak: int = 0
    correct_count: int = 0
    time_left: int = 0
    is_active: bool = False
    is_complete: bool = False
    elapsed_ms: int = 0
    new_record: bool = False
    history: List[AnswerResult] = Field(default_factory=list)
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
        config: Optional[QuickMathConfig] = None,
        sink: Optional[PointSink] = None,
        best_times: Optional[BestTimes] = None,
        clock: Optional[Callable[[], float]] = None,
        **config_kwargs: Any
    ) -> "QuickMathSession":
        """Factory method to create a quiz with its collaborators."""
        if config is None:
            config = QuickMathConfig(**config_kwargs)

        session = cls(config=config)
        session._sink = sink
        session._best_times = best_times
        if clock is not None:
            session._clock = clock
        return session

    @property
    def difficulty(self) -> Difficulty:
        if self.streak >= self.config.hard_streak:
            return "hard"
        if self.streak >= self.config.medium_streak:
            return "medium"
        return "easy"

    @property
    def record_key(self) -> str:
        return f"questions_{self.config.total_questions}"

    def start(self) -> None:
        self.score = 0
        self.streak = 0
        self.correct_count = 0
        self.question_number = 1
        self.is_active = True
        self.is_complete = False
        self.elapsed_ms = 0
        self.new_record = False
        self.history = []
        self._started_at = self._clock()
        self._next_question()

    def _next_question(self) -> None:
        self.question = generate_question(self.difficulty, self._rng)
        self.time_left = self.config.time_per_question

    def answer(self, value: Optional[int]) -> AnswerResult:
        """
        Answer the current question and move on to the next one.

        A value of None counts as a timeout (wrong answer).
        """
        if not self.is_active or self.question is None:
            return AnswerResult()

        question = self.question
        correct = value is not None and value == question.answer
        points = 0

        if correct:
            points = (
                BASE_POINTS[question.difficulty]
                + speed_bonus(self.time_left)
                + (self.config.streak_bonus if self.streak >= self.config.medium_streak else 0)
            )
            self.score += points
            self.streak += 1
            self.correct_count += 1
            if self._sink is not None:
                self._sink.add_points(points, SOURCE, f"answered {question.text}")
        else:
            self.streak = 0

        result = AnswerResult(
            correct=correct,
            answer=value,
            correct_answer=question.answer,
            points=points,
            timed_out=value is None,
        )
        self.history.append(result)

        if self.question_number >= self.config.total_questions:
            self._complete()
        else:
            self.question_number += 1
            self._next_question()

        return result

    def tick(self, seconds: int = 1) -> Optional[AnswerResult]:
        """Count down the current question; running out counts as a wrong answer."""
        if not self.is_active:
            return None

        self.time_left = max(0, self.time_left - max(0, seconds))
        if self.time_left == 0:
            return self.answer(None)
        return None

    def _complete(self) -> None:
        self.is_active = False
        self.is_complete = True
        self.question = None
        self.elapsed_ms = int((self._clock() - self._started_at) * 1000)

        if self._best_times is not None:
            self.new_record = self._best_times.record(self.record_key, self.elapsed_ms)

        if self._sink is not None:
            self._sink.add_points(0, SOURCE, "quiz complete")

        logger.info(
            "Quick math done: %d/%d correct, %d points",
            self.correct_count, self.config.total_questions, self.score,
        )

    def get_state(self) -> dict:
        return {
            "question": self.question.text if self.question else None,
            "question_number": self.question_number,
            "score": self.score,
            "streak": self.streak,
            "time_left": self.time_left,
            "is_complete": self.is_complete,
        }
