"""
Engine Core - Deterministic session state management and payout rules.

The engine is the runtime that:
1. Holds one SessionState
2. Validates incoming events
3. Applies events via the reducer
4. Computes prizes, cashouts and terminal payouts
"""

from .state import SessionState, SessionStatus, QuestionPhase, EndReason, Question
from .action import Action, ActionType, ActionPayload, ActionResult, RejectionCode
from .reducer import Reducer, apply_action
from .engine import SessionEngine
from .errors import InvalidEvent, ConfigurationError
from .payout import (
    display_prize,
    cashout_amount,
    failure_payout,
    completion_payout,
    prize_ladder,
)

__all__ = [
    "SessionState",
    "SessionStatus",
    "QuestionPhase",
    "EndReason",
    "Question",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "RejectionCode",
    "Reducer",
    "apply_action",
    "SessionEngine",
    "InvalidEvent",
    "ConfigurationError",
    "display_prize",
    "cashout_amount",
    "failure_payout",
    "completion_payout",
    "prize_ladder",
]
