"""
Session State - The aggregate root of one play session.

Design principles:
- Immutable-friendly: transitions return a new state via _copy_with
- Questions are frozen and owned by the session for its lifetime
- Per-question transient state (visible options, resolution phase)
  is reset whenever the active question changes
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum


class SessionStatus(Enum):
    """Lifecycle status of a session."""
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


class QuestionPhase(Enum):
    """Resolution phase of the active question."""
    AWAITING_ANSWER = "awaiting_answer"
    RESOLVED = "resolved"  # Answered or timed out, waiting to advance


class EndReason(Enum):
    """Why a session ended."""
    COMPLETED = "completed"  # Ran out of questions
    FAILED = "failed"  # Wrong answer / timeout with no life to spare
    CASHED_OUT = "cashedOut"  # Voluntary cashout


@dataclass(frozen=True)
class Question:
    """
    A multiple-choice question.

    options are unique within the question and correct_answer is one of them.
    Validation lives in supply.validation; the engine assumes a valid question.
    """
    question_id: str
    text: str
    options: tuple[str, ...]
    correct_answer: str
    category: str | None = None
    difficulty: str | None = None

    @property
    def incorrect_options(self) -> tuple[str, ...]:
        return tuple(o for o in self.options if o != self.correct_answer)

    def is_correct(self, option: str | None) -> bool:
        return option is not None and option == self.correct_answer


@dataclass
class SessionState:
    """
    Complete session state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    session_id: str
    questions: tuple[Question, ...]
    stake_amount: int | float

    # Progress
    current_index: int = 0
    consecutive_correct: int = 0
    lives_remaining: int = 2
    questions_answered: int = 0
    running_balance: int = 0

    # Lifelines
    fifty_fifty_used: bool = False
    skip_used: bool = False

    # Active question
    visible_options: tuple[str, ...] = ()
    phase: QuestionPhase = QuestionPhase.AWAITING_ANSWER

    # Termination
    status: SessionStatus = SessionStatus.IN_PROGRESS
    end_reason: EndReason | None = None
    final_payout: int | None = None

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)


    def __post_init__(self):
        if not self.visible_options and self.current_question is not None:
            self.visible_options = self.current_question.options

    @classmethod
    def create(
        cls,
        session_id: str,
        questions: list[Question] | tuple[Question, ...],
        stake_amount: int | float,
        lives: int = 2,
    ) -> SessionState:
        """Create the initial state of a session."""
        return cls(
            session_id=session_id,
            questions=tuple(questions),
            stake_amount=stake_amount,
            lives_remaining=lives,
        )

    @property
    def current_question(self) -> Question | None:
        """The active question, or None if the index is out of range."""
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def is_ended(self) -> bool:
        return self.status == SessionStatus.ENDED

    @property
    def is_resolved(self) -> bool:
        return self.phase == QuestionPhase.RESOLVED

    def with_next_question(self, **kwargs) -> SessionState:
        """Return new state pointing at the next question with fresh transient state."""
        next_index = self.current_index + 1
        next_question = self.questions[next_index]
        return self._copy_with(
            current_index=next_index,
            visible_options=next_question.options,
            phase=QuestionPhase.AWAITING_ANSWER,
            **kwargs,
        )

    def with_ended(self, reason: EndReason, payout: int, **kwargs) -> SessionState:
        """Return new terminal state."""
        return self._copy_with(
            status=SessionStatus.ENDED,
            end_reason=reason,
            final_payout=payout,
            **kwargs,
        )

    def _copy_with(self, **kwargs) -> SessionState:
        """Create a copy with some fields replaced."""
        return SessionState(
            session_id=kwargs.get("session_id", self.session_id),
            questions=kwargs.get("questions", self.questions),
            stake_amount=kwargs.get("stake_amount", self.stake_amount),
            current_index=kwargs.get("current_index", self.current_index),
            consecutive_correct=kwargs.get("consecutive_correct", self.consecutive_correct),
            lives_remaining=kwargs.get("lives_remaining", self.lives_remaining),
            questions_answered=kwargs.get("questions_answered", self.questions_answered),
            running_balance=kwargs.get("running_balance", self.running_balance),
            fifty_fifty_used=kwargs.get("fifty_fifty_used", self.fifty_fifty_used),
            skip_used=kwargs.get("skip_used", self.skip_used),
            visible_options=kwargs.get("visible_options", self.visible_options),
            phase=kwargs.get("phase", self.phase),
            status=kwargs.get("status", self.status),
            end_reason=kwargs.get("end_reason", self.end_reason),
            final_payout=kwargs.get("final_payout", self.final_payout),
            action_history=list(kwargs.get("action_history", self.action_history)),
        )
