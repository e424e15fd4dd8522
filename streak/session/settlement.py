"""
Settlement - The final outcome of a session and where it goes.

A settlement is produced once per ended session and handed to a sink
that credits the player's balance. Sinks are pluggable; the in-memory
sink is used by tests and the CLI.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import time

from ..engine_core.state import SessionState, EndReason


@dataclass(frozen=True)
class Settlement:
    """What gets credited for one session."""
    session_id: str
    fifty_fifty_used: bool
    skip_used: bool
    questions_answered: int
    final_payout: int
    end_reason: EndReason
    stake_amount: int | float
    settled_at: float = field(default_factory=time.time)

    @property
    def net_change(self) -> int | float:
        """Balance change over the whole session (the stake was debited at start)."""
        return self.final_payout - self.stake_amount

    @classmethod
    def from_state(cls, state: SessionState) -> Settlement:
        if not state.is_ended:
            raise ValueError(f"Session {state.session_id} has not ended")
        return cls(
            session_id=state.session_id,
            fifty_fifty_used=state.fifty_fifty_used,
            skip_used=state.skip_used,
            questions_answered=state.questions_answered,
            final_payout=state.final_payout,
            end_reason=state.end_reason,
            stake_amount=state.stake_amount,
        )


class SettlementSink(ABC):
    """Receives final outcomes for crediting."""

    @abstractmethod
    def settle(self, settlement: Settlement) -> None:
        """Persist / credit one settlement."""
        pass


class InMemorySettlementSink(SettlementSink):
    """Collects settlements in a list, keyed lookups by session id."""

    def __init__(self):
        self.settlements: list[Settlement] = []

    def settle(self, settlement: Settlement) -> None:
        self.settlements.append(settlement)

    def get(self, session_id: str) -> Settlement | None:
        for s in self.settlements:
            if s.session_id == session_id:
                return s
        return None

    @property
    def total_paid(self) -> int:
        return sum(s.final_payout for s in self.settlements)
