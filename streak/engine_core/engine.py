"""
Session Engine - Caller-owned wrapper around one session's state.

The engine holds the current SessionState and feeds events through the
reducer. It is single-writer and not thread-safe; the caller's event
loop delivers one event at a time.

Usage:
    engine = SessionEngine.create(questions, stake_amount=1000, lives=2)

    result = engine.submit_answer("Abuja")
    if result.rejected:
        show_message(result.error)
    elif result.ended:
        settle(engine.final_payout)
    else:
        engine.advance()
"""

from __future__ import annotations
from typing import Sequence
import random
import uuid

from ..config import RuleConfig, DEFAULT_RULES
from .state import SessionState, Question, EndReason
from .action import Action, ActionResult
from .reducer import Reducer, ChoiceFn
from . import payout


class SessionEngine:
    """
    Finite-state machine for one play session.

    Every operation returns an ActionResult. With strict=True a rejected
    event raises InvalidEvent instead; state is unchanged either way.
    """

    def __init__(
        self,
        state: SessionState,
        rules: RuleConfig | None = None,
        choose: ChoiceFn | None = None,
        seed: int | None = None,
        strict: bool = False,
    ):
        if choose is None:
            choose = random.Random(seed).choice
        self._state = state
        self.rules = rules or DEFAULT_RULES
        self.reducer = Reducer(rules=self.rules, choose=choose)
        self.strict = strict

    @classmethod
    def create(
        cls,
        questions: Sequence[Question],
        stake_amount: int | float,
        lives: int | None = None,
        session_id: str | None = None,
        **kwargs,
    ) -> SessionEngine:
        """
        Build an engine for a new session.

        Inputs are validated; a bad question set, stake or lives count
        raises ConfigurationError before any event is accepted.
        """
        from ..supply.validation import validate_session_inputs

        rules = kwargs.get("rules") or DEFAULT_RULES
        if lives is None:
            lives = rules.starting_lives
        validate_session_inputs(questions, stake_amount, lives)

        state = SessionState.create(
            session_id=session_id or str(uuid.uuid4()),
            questions=questions,
            stake_amount=stake_amount,
            lives=lives,
        )
        return cls(state, **kwargs)

    # -- Events -------------------------------------------------------------

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an event and keep the new state if it was accepted."""
        result = self.reducer.apply(self._state, action)
        if result.success and result.new_state is not None:
            self._state = result.new_state
        if self.strict:
            result.raise_for_rejection()
        return result

    def submit_answer(self, option: str) -> ActionResult:
        return self.dispatch(Action.answer(option))

    def time_expire(self) -> ActionResult:
        return self.dispatch(Action.time_expire())

    def apply_fifty_fifty(self) -> ActionResult:
        return self.dispatch(Action.fifty_fifty())

    def apply_skip(self) -> ActionResult:
        return self.dispatch(Action.skip())

    def request_cashout(self) -> ActionResult:
        return self.dispatch(Action.cashout())

    def advance(self) -> ActionResult:
        return self.dispatch(Action.advance())

    # -- Read-only views ----------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def current_question(self) -> Question | None:
        if self._state.is_ended:
            return None
        return self._state.current_question

    @property
    def visible_options(self) -> tuple[str, ...]:
        return self._state.visible_options

    @property
    def display_prize(self) -> int:
        """Prize shown for the active question at the current streak."""
        return payout.display_prize(self._state.stake_amount, self._state.consecutive_correct)

    @property
    def cashout_amount(self) -> int:
        """What a cashout would pay right now (0 when not eligible)."""
        return payout.cashout_amount(
            self._state.stake_amount,
            self._state.consecutive_correct,
            self._state.running_balance,
        )

    @property
    def can_cash_out(self) -> bool:
        return (
            not self._state.is_ended
            and self._state.consecutive_correct >= payout.CASHOUT_STREAK
        )

    @property
    def is_ended(self) -> bool:
        return self._state.is_ended

    @property
    def end_reason(self) -> EndReason | None:
        return self._state.end_reason

    @property
    def final_payout(self) -> int | None:
        return self._state.final_payout
