"""
Game Loop - Drives one session from the clock and the player.

The loop:
1. Question becomes active, timer starts at the time limit
2. Each one-second tick counts the timer down
3. Player answers (or uses a lifeline / cashes out) before it reaches zero,
   otherwise the tick that reaches zero delivers time_expire()
4. After a resolution the correct answer is shown for a short delay,
   then the loop advances to the next question
5. When the session ends the settlement is produced
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import ActionResult

if TYPE_CHECKING:
    from .manager import Session, SessionManager
    from .settlement import Settlement


class LoopState(Enum):
    """State of the game loop."""
    AWAITING_ANSWER = "awaiting_answer"
    SHOWING_RESULT = "showing_result"  # Resolved, waiting out the advance delay
    SESSION_OVER = "session_over"


@dataclass
class LoopResult:
    """
    Result of one tick or player input.

    event is the engine result when something was delivered to the engine,
    None for a plain countdown tick.
    """
    loop_state: LoopState
    seconds_left: int
    event: ActionResult | None = None
    settlement: Settlement | None = None
    timed_out: bool = False


class GameLoop:
    """
    Clock-driven driver around a session's engine.

    Usage:
        loop = GameLoop(session, manager)

        # every second
        result = loop.tick()

        # on player input
        result = loop.answer("Abuja")

        if result.settlement:
            show_final_payout(result.settlement.final_payout)
    """

    def __init__(
        self,
        session: Session,
        manager: SessionManager | None = None,
        time_limit: int | None = None,
        advance_delay: int | None = None,
    ):
        self.session = session
        self.manager = manager
        rules = session.engine.rules
        self.time_limit = time_limit if time_limit is not None else rules.question_time_limit
        self.advance_delay = advance_delay if advance_delay is not None else rules.advance_delay

        self.seconds_left = self.time_limit
        self._advance_countdown: int | None = None
        self.settlement: Settlement | None = None
        self.state = self._derive_state()
        if self.state == LoopState.SHOWING_RESULT:
            self._advance_countdown = self.advance_delay

    @property
    def engine(self):
        return self.session.engine

    def tick(self) -> LoopResult:
        """Advance the clock by one second."""
        if self.state == LoopState.SESSION_OVER:
            return self._result()

        if self.state == LoopState.SHOWING_RESULT:
            self._advance_countdown -= 1
            if self._advance_countdown <= 0:
                return self._deliver(self.engine.advance)
            return self._result()

        self.seconds_left = max(self.seconds_left - 1, 0)
        if self.seconds_left == 0:
            result = self._deliver(self.engine.time_expire)
            result.timed_out = result.event is not None and result.event.success
            return result
        return self._result()

    def answer(self, option: str) -> LoopResult:
        return self._deliver(self.engine.submit_answer, option)

    def fifty_fifty(self) -> LoopResult:
        return self._deliver(self.engine.apply_fifty_fifty)

    def skip(self) -> LoopResult:
        return self._deliver(self.engine.apply_skip)

    def cashout(self) -> LoopResult:
        return self._deliver(self.engine.request_cashout)

    def _deliver(self, operation, *args) -> LoopResult:
        """Run an engine operation and update the timer bookkeeping."""
        index_before = self.engine.state.current_index
        event = operation(*args)
        if not event.success:
            return self._result(event)

        self.state = self._derive_state()

        if self.state == LoopState.SESSION_OVER:
            self._advance_countdown = None
            if self.manager is not None:
                self.settlement = self.manager.settle(self.session.session_id)
        elif self.state == LoopState.SHOWING_RESULT:
            if self._advance_countdown is None:
                if self.advance_delay <= 0:
                    self._deliver(self.engine.advance)
                    return self._result(event)
                self._advance_countdown = self.advance_delay
        elif self.engine.state.current_index != index_before:
            # new question, fresh timer
            self._advance_countdown = None
            self.seconds_left = self.time_limit

        return self._result(event)

    def _derive_state(self) -> LoopState:
        state = self.engine.state
        if state.is_ended:
            return LoopState.SESSION_OVER
        if state.is_resolved:
            return LoopState.SHOWING_RESULT
        return LoopState.AWAITING_ANSWER

    def _result(self, event: ActionResult | None = None) -> LoopResult:
        return LoopResult(
            loop_state=self.state,
            seconds_left=self.seconds_left,
            event=event,
            settlement=self.settlement,
        )
