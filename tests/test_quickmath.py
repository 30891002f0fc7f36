"""Test the quick math quiz: question generation, bonuses and timeouts."""

import random

import pytest
from src.environment import (
    BestTimes,
    MemoryStore,
    PointsLedger,
    QuickMathConfig,
    QuickMathSession,
    generate_question,
    speed_bonus,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_quiz(**kwargs):
    ledger = PointsLedger()
    best_times = BestTimes(MemoryStore(), game="quickmath")
    clock = FakeClock()
    config = QuickMathConfig(seed=kwargs.pop("seed", 11), **kwargs)
    quiz = QuickMathSession.create(config=config, sink=ledger, best_times=best_times, clock=clock)
    return quiz, ledger, best_times, clock


def evaluate(text):
    tokens = text.replace("= ?", "").split()
    value = int(tokens[0])
    for op, operand in zip(tokens[1::2], tokens[2::2]):
        operand = int(operand)
        if op == "+":
            value += operand
        elif op == "-":
            value -= operand
        elif op == "×":
            value *= operand
        elif op == "÷":
            assert value % operand == 0
            value //= operand
    return value


def wrong_option(quiz):
    return next(o for o in quiz.question.options if o != quiz.question.answer)


class TestGenerateQuestion:
    """Questions per difficulty."""

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
    def test_answer_matches_text(self, difficulty):
        rng = random.Random(5)
        for _ in range(50):
            question = generate_question(difficulty, rng)
            assert question.difficulty == difficulty
            assert evaluate(question.text) == question.answer

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
    def test_options(self, difficulty):
        rng = random.Random(9)
        for _ in range(50):
            question = generate_question(difficulty, rng)
            assert len(question.options) == 4
            assert len(set(question.options)) == 4
            assert question.answer in question.options
            assert all(o > 0 for o in question.options if o != question.answer)

    def test_operators(self):
        rng = random.Random(1)
        easy = {generate_question("easy", rng).text.split()[1] for _ in range(40)}
        medium = {generate_question("medium", rng).text.split()[1] for _ in range(40)}
        hard = generate_question("hard", rng).text.split()

        assert easy == {"+", "-"}
        assert medium == {"×", "÷"}
        assert hard[1] == "+" and hard[3] == "-"

    def test_subtraction_never_negative(self):
        rng = random.Random(2)
        for _ in range(100):
            assert generate_question("easy", rng).answer >= 0

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            generate_question("expert", random.Random())

    def test_speed_bonus(self):
        assert speed_bonus(10) == 5
        assert speed_bonus(8) == 5
        assert speed_bonus(7) == 3
        assert speed_bonus(5) == 3
        assert speed_bonus(4) == 0


class TestScoring:
    """Points per answer."""

    def test_fast_easy_answer(self):
        quiz, ledger, _, _ = make_quiz()
        quiz.start()

        result = quiz.answer(quiz.question.answer)

        assert result.correct
        assert result.points == 15
        assert ledger.total == 15
        assert quiz.question_number == 2

    def test_slower_answer(self):
        quiz, _, _, _ = make_quiz()
        quiz.start()
        quiz.tick(3)
        assert quiz.answer(quiz.question.answer).points == 13
        quiz.tick(7)
        assert quiz.answer(quiz.question.answer).points == 10

    def test_streak_raises_difficulty_and_bonus(self):
        quiz, _, _, _ = make_quiz()
        quiz.start()
        points = [quiz.answer(quiz.question.answer).points for _ in range(5)]

        assert points == [15] * 5
        assert quiz.difficulty == "medium"
        assert quiz.question.difficulty == "medium"
        assert quiz.answer(quiz.question.answer).points == 20 + 5 + 10

        for _ in range(4):
            quiz.answer(quiz.question.answer)
        assert quiz.question.difficulty == "hard"
        assert quiz.answer(quiz.question.answer).points == 30 + 5 + 10

    def test_wrong_answer_resets_streak(self):
        quiz, ledger, _, _ = make_quiz()
        quiz.start()
        for _ in range(5):
            quiz.answer(quiz.question.answer)
        before = ledger.total

        result = quiz.answer(wrong_option(quiz))

        assert not result.correct
        assert result.points == 0
        assert quiz.streak == 0
        assert quiz.question.difficulty == "easy"
        assert ledger.total == before


class TestTimer:
    """Per-question countdown."""

    def test_timeout_counts_as_wrong(self):
        quiz, _, _, _ = make_quiz()
        quiz.start()
        quiz.answer(quiz.question.answer)

        assert quiz.tick(9) is None
        result = quiz.tick()

        assert result.timed_out
        assert not result.correct
        assert quiz.streak == 0
        assert quiz.question_number == 3
        assert quiz.time_left == 10

    def test_negative_tick_ignored(self):
        quiz, _, _, _ = make_quiz()
        quiz.start()
        quiz.tick(2)
        quiz.tick(-5)
        assert quiz.time_left == 8

    def test_tick_before_start(self):
        quiz, _, _, _ = make_quiz()
        assert quiz.tick() is None


class TestCompletion:
    """Finishing the quiz."""

    def test_full_quiz(self):
        quiz, ledger, best_times, clock = make_quiz()
        quiz.start()
        clock.now = 60
        for _ in range(15):
            quiz.answer(quiz.question.answer)

        assert quiz.is_complete
        assert quiz.question is None
        assert quiz.correct_count == 15
        assert len(quiz.history) == 15
        assert ledger.total == quiz.score
        assert ledger.events[-1].reason == "quiz complete"
        assert best_times.get("questions_15") == 60000
        assert quiz.new_record

    def test_answer_after_completion(self):
        quiz, _, _, _ = make_quiz(total_questions=1)
        quiz.start()
        quiz.answer(None)

        assert quiz.is_complete
        result = quiz.answer(3)
        assert result.correct is False
        assert len(quiz.history) == 1
