"""
Action System - Session events, payloads, and results.

Actions represent the engine's input alphabet:
1. Player events (answer, 50/50, skip, cashout)
2. Clock events (time expired)
3. Flow events (advance to the next question)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import InvalidEvent


class ActionType(Enum):
    """Types of session events."""
    SUBMIT_ANSWER = "submit_answer"
    TIME_EXPIRE = "time_expire"
    FIFTY_FIFTY = "fifty_fifty"
    SKIP = "skip"
    CASHOUT = "cashout"
    ADVANCE = "advance"


class RejectionCode(Enum):
    """Why an event was rejected."""
    SESSION_ENDED = "SESSION_ENDED"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    NOT_RESOLVED = "NOT_RESOLVED"
    OPTION_NOT_VISIBLE = "OPTION_NOT_VISIBLE"
    LIFELINE_USED = "LIFELINE_USED"
    CASHOUT_INELIGIBLE = "CASHOUT_INELIGIBLE"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """
    Payload for an action.

    Only SUBMIT_ANSWER carries data; the rest are bare events.
    """
    option: str | None = None


@dataclass
class Action:
    """
    A session event to be applied to the state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def answer(cls, option: str) -> Action:
        """Factory for answer-selected event."""
        return cls(
            action_type=ActionType.SUBMIT_ANSWER,
            payload=ActionPayload(option=option),
        )

    @classmethod
    def time_expire(cls) -> Action:
        """Factory for time-expired event."""
        return cls(action_type=ActionType.TIME_EXPIRE)

    @classmethod
    def fifty_fifty(cls) -> Action:
        return cls(action_type=ActionType.FIFTY_FIFTY)

    @classmethod
    def skip(cls) -> Action:
        return cls(action_type=ActionType.SKIP)

    @classmethod
    def cashout(cls) -> Action:
        return cls(action_type=ActionType.CASHOUT)

    @classmethod
    def advance(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the event was accepted
    - New state (if accepted)
    - Rejection reason (if rejected)
    - What changed, for the presentation layer
    """
    success: bool
    new_state: Any | None = None  # SessionState
    error: str | None = None
    error_code: RejectionCode | None = None

    # Answer outcome
    correct: bool | None = None
    correct_answer: str | None = None

    # Progress after the event
    streak: int = 0
    running_balance: int = 0
    display_prize: int = 0

    # Lives
    life_lost: bool = False
    lives_remaining: int = 0

    # Termination
    ended: bool = False
    end_reason: Any | None = None  # EndReason
    final_payout: int | None = None

    # Human-readable changes
    state_changes: list[str] = field(default_factory=list)

    @property
    def rejected(self) -> bool:
        return not self.success

    @classmethod
    def failure(cls, error: str, error_code: RejectionCode | None = None) -> ActionResult:
        """Create a rejection result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        prize: int = 0,
        changes: list[str] | None = None,
        **outcome: Any,
    ) -> ActionResult:
        """Create a success result, copying progress fields from the new state."""
        return cls(
            success=True,
            new_state=state,
            streak=state.consecutive_correct,
            running_balance=state.running_balance,
            display_prize=prize,
            lives_remaining=state.lives_remaining,
            ended=state.is_ended,
            end_reason=state.end_reason,
            final_payout=state.final_payout,
            state_changes=changes or [],
            **outcome,
        )

    def raise_for_rejection(self) -> ActionResult:
        """Raise InvalidEvent if the event was rejected, else return self."""
        if not self.success:
            raise InvalidEvent(self.error or "Event rejected", code=self.error_code)
        return self
