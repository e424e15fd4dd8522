"""
Shared builders for Streak tests.
"""

from ..engine_core.state import Question
from ..engine_core.engine import SessionEngine


def make_question(n: int, options=None, correct=None) -> Question:
    """Build question n with options A<n>..D<n>, correct answer A<n>."""
    options = options or [f"A{n}", f"B{n}", f"C{n}", f"D{n}"]
    return Question(
        question_id=f"q{n}",
        text=f"Question {n}?",
        options=tuple(options),
        correct_answer=correct or options[0],
        category="General",
        difficulty="easy",
    )


def make_questions(count: int) -> list[Question]:
    return [make_question(n) for n in range(1, count + 1)]


def first_choice(options):
    """Deterministic stand-in for random.choice."""
    return options[0]


def answer_correctly(engine: SessionEngine, times: int) -> None:
    """Answer `times` questions correctly, advancing between them."""
    for _ in range(times):
        question = engine.current_question
        result = engine.submit_answer(question.correct_answer)
        assert result.success
        if not engine.is_ended:
            assert engine.advance().success


def wrong_option(question: Question) -> str:
    return question.incorrect_options[0]
