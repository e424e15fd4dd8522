"""
Pydantic Schemas - The contract with the engine's collaborators.

Inputs:
- QuestionPayload / SessionSupply: what the question supplier hands over.
  Both the backend's camelCase keys (correctAnswer, stakeAmount, sessionId)
  and snake_case names are accepted.

Outputs:
- EventResultPayload: per-event result for the presentation layer
- SessionSnapshot: read-only view of a session
- SettlementPayload: what the settlement sink persists
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Union, TYPE_CHECKING
from pydantic import BaseModel, Field

from ..engine_core.state import Question
from ..engine_core import payout

if TYPE_CHECKING:
    from ..engine_core.action import ActionResult
    from ..engine_core.state import SessionState
    from ..session.settlement import Settlement


# =============================================================================
# Enums
# =============================================================================

class EndReasonValue(str, Enum):
    """End reasons as they appear on the wire."""
    COMPLETED = "completed"
    FAILED = "failed"
    CASHED_OUT = "cashedOut"


# =============================================================================
# Inputs
# =============================================================================

class QuestionPayload(BaseModel):
    """A question as delivered by the question supplier."""
    id: Union[str, int]
    text: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    category: Optional[str] = None
    difficulty: Optional[str] = None

    model_config = {"populate_by_name": True}

    def to_question(self) -> Question:
        return Question(
            question_id=str(self.id),
            text=self.text,
            options=tuple(self.options),
            correct_answer=self.correct_answer,
            category=self.category,
            difficulty=self.difficulty,
        )


class SessionSupply(BaseModel):
    """Everything needed to start a session."""
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    questions: list[QuestionPayload]
    stake_amount: float = Field(alias="stakeAmount", allow_inf_nan=False)
    lives: Optional[int] = None

    model_config = {"populate_by_name": True}


# =============================================================================
# Outputs
# =============================================================================

class EventResultPayload(BaseModel):
    """What changed after one event."""
    success: bool
    correct: Optional[bool] = None
    correct_answer: Optional[str] = None
    streak: int = 0
    running_balance: int = 0
    display_prize: int = 0
    life_lost: bool = False
    lives_remaining: int = 0
    ended: bool = False
    end_reason: Optional[EndReasonValue] = None
    final_payout: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    state_changes: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ActionResult) -> EventResultPayload:
        return cls(
            success=result.success,
            correct=result.correct,
            correct_answer=result.correct_answer,
            streak=result.streak,
            running_balance=result.running_balance,
            display_prize=result.display_prize,
            life_lost=result.life_lost,
            lives_remaining=result.lives_remaining,
            ended=result.ended,
            end_reason=result.end_reason.value if result.end_reason else None,
            final_payout=result.final_payout,
            error=result.error,
            error_code=result.error_code.value if result.error_code else None,
            state_changes=list(result.state_changes),
        )


class SessionSnapshot(BaseModel):
    """Read-only view of a session for display."""
    session_id: str
    status: str
    question_number: int = Field(description="1-based index of the active question")
    total_questions: int
    question_text: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    visible_options: list[str] = Field(default_factory=list)
    streak: int = 0
    lives_remaining: int = 0
    running_balance: int = 0
    display_prize: int = 0
    cashout_amount: int = 0
    fifty_fifty_used: bool = False
    skip_used: bool = False
    end_reason: Optional[EndReasonValue] = None
    final_payout: Optional[int] = None

    @classmethod
    def from_state(cls, state: SessionState) -> SessionSnapshot:
        question = None if state.is_ended else state.current_question
        return cls(
            session_id=state.session_id,
            status=state.status.value,
            question_number=state.current_index + 1,
            total_questions=state.total_questions,
            question_text=question.text if question else None,
            category=question.category if question else None,
            difficulty=question.difficulty if question else None,
            visible_options=list(state.visible_options) if question else [],
            streak=state.consecutive_correct,
            lives_remaining=state.lives_remaining,
            running_balance=state.running_balance,
            display_prize=payout.display_prize(state.stake_amount, state.consecutive_correct),
            cashout_amount=payout.cashout_amount(
                state.stake_amount, state.consecutive_correct, state.running_balance
            ),
            fifty_fifty_used=state.fifty_fifty_used,
            skip_used=state.skip_used,
            end_reason=state.end_reason.value if state.end_reason else None,
            final_payout=state.final_payout,
        )


class SettlementPayload(BaseModel):
    """Final outcome handed to the settlement sink."""
    session_id: str
    fifty_fifty_used: bool
    skip_used: bool
    questions_answered: int
    final_payout: int
    end_reason: EndReasonValue
    stake_amount: float
    net_change: float

    @classmethod
    def from_settlement(cls, settlement: Settlement) -> SettlementPayload:
        return cls(
            session_id=settlement.session_id,
            fifty_fifty_used=settlement.fifty_fifty_used,
            skip_used=settlement.skip_used,
            questions_answered=settlement.questions_answered,
            final_payout=settlement.final_payout,
            end_reason=settlement.end_reason.value,
            stake_amount=settlement.stake_amount,
            net_change=settlement.net_change,
        )
