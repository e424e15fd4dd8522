"""
Pytest fixtures for Streak tests.
"""

import pytest

from ..config import RuleConfig
from ..engine_core.state import Question, SessionState
from ..engine_core.engine import SessionEngine
from ..session import SessionManager, InMemorySettlementSink
from .helpers import make_questions, first_choice


@pytest.fixture
def rules() -> RuleConfig:
    return RuleConfig()


@pytest.fixture
def questions() -> list[Question]:
    """Fifteen questions, enough to reach the long-streak tier."""
    return make_questions(15)


@pytest.fixture
def session_state(questions) -> SessionState:
    return SessionState.create(
        session_id="test_session",
        questions=questions,
        stake_amount=1000,
        lives=2,
    )


@pytest.fixture
def engine(questions) -> SessionEngine:
    """Engine with stake 1000, 2 lives and a deterministic 50/50."""
    return SessionEngine.create(
        questions,
        stake_amount=1000,
        lives=2,
        session_id="test_session",
        choose=first_choice,
    )


@pytest.fixture
def sink() -> InMemorySettlementSink:
    return InMemorySettlementSink()


@pytest.fixture
def manager(sink) -> SessionManager:
    return SessionManager(sink=sink)
