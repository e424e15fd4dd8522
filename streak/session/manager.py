"""
Session Manager - Creates and manages play sessions.

LIFECYCLE:
1. Question supplier delivers questions + stake + lives
2. Manager validates the supply and creates an in-memory session
3. During play the caller feeds events to the session's engine
4. Session ends (completed, failed or cashed out)
   -> settlement is sent to the sink exactly once
5. Session is removed from memory

PERSISTENCE RULES:
- Session state is in-memory only
- The only thing that leaves the engine is the settlement
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Sequence
import logging
import time
import uuid

from ..config import RuleConfig, DEFAULT_RULES
from ..engine_core.engine import SessionEngine
from ..engine_core.state import SessionState, Question
from ..supply.validation import validate_session_inputs, parse_supply
from .settlement import Settlement, SettlementSink, InMemorySettlementSink

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One tracked play session.

    Contains:
    - The engine owning the session state
    - The settlement, once the session has been settled
    """
    session_id: str
    engine: SessionEngine
    created_at: float
    settlement: Settlement | None = None

    def is_active(self) -> bool:
        """Check if session still accepts events."""
        return not self.engine.is_ended

    @property
    def is_settled(self) -> bool:
        return self.settlement is not None

    @property
    def state(self) -> SessionState:
        return self.engine.state


class SessionManager:
    """
    Manages play sessions.

    Responsibilities:
    - Create sessions from validated supplies
    - Track sessions by id
    - Settle ended sessions exactly once
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        sink: SettlementSink | None = None,
        rules: RuleConfig | None = None,
    ):
        self.sink = sink or InMemorySettlementSink()
        self.rules = rules or DEFAULT_RULES
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        questions: Sequence[Question],
        stake_amount: int | float,
        lives: int | None = None,
        balance: float | None = None,
        session_id: str | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new play session.

        Args:
            questions: Ordered question set
            stake_amount: Amount wagered
            lives: Starting lives (rules default when omitted)
            balance: Player balance; the stake may not exceed it
            session_id: Supplier's session id (generated when omitted)
            seed: Seed for the 50/50 choice

        Raises:
            ConfigurationError: if any input is invalid
        """
        if lives is None:
            lives = self.rules.starting_lives
        validate_session_inputs(questions, stake_amount, lives, balance=balance)

        session_id = session_id or str(uuid.uuid4())
        state = SessionState.create(
            session_id=session_id,
            questions=questions,
            stake_amount=stake_amount,
            lives=lives,
        )
        engine = SessionEngine(state, rules=self.rules, seed=seed)

        session = Session(
            session_id=session_id,
            engine=engine,
            created_at=time.time(),
        )
        self._sessions[session_id] = session
        logger.info(
            "Created session %s: %d questions, stake %s, %d lives",
            session_id, len(questions), stake_amount, lives,
        )
        return session

    def create_from_supply(
        self,
        data: dict[str, Any],
        balance: float | None = None,
        seed: int | None = None,
    ) -> Session:
        """Create a session from a raw supplier payload."""
        supply, questions = parse_supply(data)
        return self.create_session(
            questions,
            supply.stake_amount,
            lives=supply.lives,
            balance=balance,
            session_id=supply.session_id,
            seed=seed,
        )

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def settle(self, session_id: str) -> Settlement:
        """
        Send the session's final outcome to the sink.

        Idempotent: a session is settled at most once and later calls
        return the recorded settlement.

        Raises:
            KeyError: unknown session
            ValueError: session has not ended
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found")
        if session.is_settled:
            return session.settlement

        settlement = Settlement.from_state(session.state)
        self.sink.settle(settlement)
        session.settlement = settlement
        logger.info(
            "Settled session %s: %s, payout %s",
            session_id, settlement.end_reason.value, settlement.final_payout,
        )
        return settlement

    def end_session(self, session_id: str) -> Settlement | None:
        """
        Remove a session from memory.

        An ended session is settled first. A session abandoned while still
        in progress is dropped without settlement (the stake is forfeited).
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None

        settlement = None
        if session.engine.is_ended:
            settlement = self.settle(session_id)
        else:
            logger.warning("Session %s abandoned in progress", session_id)

        del self._sessions[session_id]
        return settlement

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still in progress."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(
        self,
        max_age_seconds: int = 3600,
        abandon_after_seconds: int | None = None,
    ) -> list[str]:
        """
        Remove finished sessions older than max_age.

        When abandon_after_seconds is given, sessions still in progress
        after that long are removed too, forfeiting the stake.

        Called periodically to free memory. Returns the removed IDs.
        """
        current_time = time.time()
        to_remove = []
        for session_id, session in self._sessions.items():
            age = current_time - session.created_at
            if session.is_active():
                if abandon_after_seconds is not None and age > abandon_after_seconds:
                    to_remove.append(session_id)
            elif age > max_age_seconds:
                to_remove.append(session_id)

        for session_id in to_remove:
            self.end_session(session_id)
        if to_remove:
            logger.info("Cleaned up %d stale session(s)", len(to_remove))
        return to_remove
