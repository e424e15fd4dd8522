"""
Reducer - Applies session events to session state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; a rejected event leaves state untouched
- Returns ActionResult with success/failure and what changed
- Randomness (50/50) comes from an injected choice function
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Sequence
import logging
import random

from ..config import RuleConfig, DEFAULT_RULES
from .state import SessionState, EndReason, QuestionPhase
from .action import Action, ActionType, ActionResult, RejectionCode
from .payout import (
    CASHOUT_STREAK,
    display_prize,
    cashout_amount,
    failure_payout,
    completion_payout,
)

logger = logging.getLogger(__name__)

ChoiceFn = Callable[[Sequence[str]], str]

# Events that act on the active, unresolved question
QUESTION_EVENTS = {
    ActionType.SUBMIT_ANSWER,
    ActionType.TIME_EXPIRE,
    ActionType.FIFTY_FIFTY,
    ActionType.SKIP,
}


@dataclass
class Reducer:
    """
    Reducer applies events to session state.

    Stateless - all state is in SessionState.
    Rules provide the grace window; choose picks the option 50/50 keeps.
    """
    rules: RuleConfig = DEFAULT_RULES
    choose: ChoiceFn = field(default_factory=lambda: random.Random().choice)

    def apply(self, state: SessionState, action: Action) -> ActionResult:
        """
        Apply an event to the session state.

        Returns ActionResult with new state or rejection.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            message, code = rejection
            logger.debug(
                "Session %s rejected %s: %s",
                state.session_id, action.action_type.value, message,
            )
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=RejectionCode.NO_HANDLER,
            )

        result = handler(state, action)
        if result.success and result.new_state:
            result.new_state.action_history.append(action)
            if result.ended:
                logger.info(
                    "Session %s ended (%s) with payout %s",
                    state.session_id, result.end_reason.value, result.final_payout,
                )
        return result

    def _validate_action(
        self, state: SessionState, action: Action
    ) -> tuple[str, RejectionCode] | None:
        """
        Check that an event is acceptable in the current state.

        Returns (message, code) if rejected, None if valid.
        """
        if state.is_ended:
            return "Session has ended - no events accepted", RejectionCode.SESSION_ENDED

        if state.current_question is None:
            return "No active question", RejectionCode.SESSION_ENDED

        if action.action_type in QUESTION_EVENTS and state.is_resolved:
            return "Question already resolved", RejectionCode.ALREADY_RESOLVED

        if action.action_type == ActionType.SUBMIT_ANSWER:
            if action.payload.option not in state.visible_options:
                return (
                    f"Option {action.payload.option!r} is not selectable",
                    RejectionCode.OPTION_NOT_VISIBLE,
                )

        if action.action_type == ActionType.FIFTY_FIFTY and state.fifty_fifty_used:
            return "50/50 already used", RejectionCode.LIFELINE_USED

        if action.action_type == ActionType.SKIP and state.skip_used:
            return "Skip already used", RejectionCode.LIFELINE_USED

        if action.action_type == ActionType.CASHOUT:
            if state.consecutive_correct < CASHOUT_STREAK:
                return (
                    f"Cashout needs {CASHOUT_STREAK} consecutive correct answers, "
                    f"have {state.consecutive_correct}",
                    RejectionCode.CASHOUT_INELIGIBLE,
                )

        if action.action_type == ActionType.ADVANCE and not state.is_resolved:
            return "Active question not resolved yet", RejectionCode.NOT_RESOLVED

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SUBMIT_ANSWER: self._handle_answer,
            ActionType.TIME_EXPIRE: self._handle_time_expire,
            ActionType.FIFTY_FIFTY: self._handle_fifty_fifty,
            ActionType.SKIP: self._handle_skip,
            ActionType.CASHOUT: self._handle_cashout,
            ActionType.ADVANCE: self._handle_advance,
        }
        return handlers.get(action_type)

    def _handle_answer(self, state: SessionState, action: Action) -> ActionResult:
        """Handle answer-selected event."""
        question = state.current_question
        option = action.payload.option

        if not question.is_correct(option):
            return self._resolve_incorrect(state, f"Answered {option!r}")

        streak = state.consecutive_correct + 1
        prize = display_prize(state.stake_amount, streak)
        balance = state.running_balance + prize
        progress = dict(
            consecutive_correct=streak,
            running_balance=balance,
            questions_answered=state.questions_answered + 1,
        )
        changes = [f"Correct answer, streak {streak}, +{prize}"]

        if state.is_last_question:
            new_state = state.with_ended(
                EndReason.COMPLETED, completion_payout(balance), **progress
            )
            changes.append("All questions answered")
        else:
            new_state = state._copy_with(phase=QuestionPhase.RESOLVED, **progress)

        return ActionResult.success_with_state(
            new_state,
            prize=prize,
            changes=changes,
            correct=True,
            correct_answer=question.correct_answer,
        )

    def _handle_time_expire(self, state: SessionState, action: Action) -> ActionResult:
        """Handle time-expired event: a wrong answer with no option selected."""
        return self._resolve_incorrect(state, "Time expired")

    def _resolve_incorrect(self, state: SessionState, reason: str) -> ActionResult:
        """
        Wrong-answer policy.

        Inside the grace window with a spare life the session continues;
        otherwise it ends as failed, paid on the streak held before this answer.
        Losing the last life always ends the session.
        """
        question = state.current_question
        prior_streak = state.consecutive_correct
        answered = state.questions_answered + 1
        in_grace = state.current_index < self.rules.grace_threshold

        if in_grace and state.lives_remaining > 1:
            lives = state.lives_remaining - 1
            progress = dict(
                consecutive_correct=0,
                lives_remaining=lives,
                questions_answered=answered,
            )
            changes = [reason, f"Life lost, {lives} remaining"]
            if state.is_last_question:
                new_state = state.with_ended(
                    EndReason.COMPLETED,
                    completion_payout(state.running_balance),
                    **progress,
                )
                changes.append("No questions remaining")
            else:
                new_state = state._copy_with(phase=QuestionPhase.RESOLVED, **progress)

            return ActionResult.success_with_state(
                new_state,
                prize=display_prize(state.stake_amount, 0),
                changes=changes,
                correct=False,
                correct_answer=question.correct_answer,
                life_lost=True,
            )

        payout = failure_payout(state.stake_amount, prior_streak)
        new_state = state.with_ended(
            EndReason.FAILED,
            payout,
            consecutive_correct=0,
            questions_answered=answered,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[reason, f"Session failed at streak {prior_streak}, payout {payout}"],
            correct=False,
            correct_answer=question.correct_answer,
        )

    def _handle_fifty_fifty(self, state: SessionState, action: Action) -> ActionResult:
        """Keep the correct option plus one incorrect option."""
        question = state.current_question
        incorrect = [o for o in state.visible_options if o != question.correct_answer]

        kept = {question.correct_answer}
        if incorrect:
            kept.add(self.choose(incorrect))
        visible = tuple(o for o in question.options if o in kept)

        new_state = state._copy_with(visible_options=visible, fifty_fifty_used=True)
        return ActionResult.success_with_state(
            new_state,
            prize=display_prize(state.stake_amount, state.consecutive_correct),
            changes=[f"50/50 used, remaining options: {', '.join(visible)}"],
        )

    def _handle_skip(self, state: SessionState, action: Action) -> ActionResult:
        """
        Skip the active question.

        Neither correct nor incorrect, but the streak is reset: a skipped
        question breaks the run of consecutive correct answers.
        """
        progress = dict(consecutive_correct=0, skip_used=True)

        if state.is_last_question:
            new_state = state.with_ended(
                EndReason.COMPLETED, completion_payout(state.running_balance), **progress
            )
            changes = ["Question skipped", "No questions remaining"]
        else:
            new_state = state.with_next_question(**progress)
            changes = [f"Question skipped, now on question {new_state.current_index + 1}"]

        return ActionResult.success_with_state(
            new_state,
            prize=display_prize(state.stake_amount, 0),
            changes=changes,
        )

    def _handle_cashout(self, state: SessionState, action: Action) -> ActionResult:
        """Lock in the cashout amount for the current streak."""
        payout = cashout_amount(
            state.stake_amount, state.consecutive_correct, state.running_balance
        )
        new_state = state.with_ended(EndReason.CASHED_OUT, payout)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Cashed out {payout} at streak {state.consecutive_correct}"],
        )

    def _handle_advance(self, state: SessionState, action: Action) -> ActionResult:
        """Move from a resolved question to the next one."""
        if state.is_last_question:
            new_state = state.with_ended(
                EndReason.COMPLETED, completion_payout(state.running_balance)
            )
            return ActionResult.success_with_state(new_state, changes=["No questions remaining"])

        new_state = state.with_next_question()
        return ActionResult.success_with_state(
            new_state,
            prize=display_prize(state.stake_amount, new_state.consecutive_correct),
            changes=[f"Now on question {new_state.current_index + 1}"],
        )


def apply_action(
    state: SessionState,
    action: Action,
    rules: RuleConfig | None = None,
    choose: ChoiceFn | None = None,
) -> ActionResult:
    """Convenience function to apply an event."""
    reducer = Reducer(rules=rules or DEFAULT_RULES)
    if choose is not None:
        reducer.choose = choose
    return reducer.apply(state, action)
