"""
Session Module - Manages ephemeral play sessions.

A session represents one play-through:
- Created when the question supplier delivers questions and a stake
- Holds the engine and its current state
- Driven by the player's inputs and the question clock
- Settled exactly once, then destroyed

Sessions are EPHEMERAL:
- No persistence of gameplay state
- The settlement is the only output that outlives a session
"""

from .manager import SessionManager, Session
from .game_loop import GameLoop, LoopState, LoopResult
from .settlement import Settlement, SettlementSink, InMemorySettlementSink

__all__ = [
    "SessionManager",
    "Session",
    "GameLoop",
    "LoopState",
    "LoopResult",
    "Settlement",
    "SettlementSink",
    "InMemorySettlementSink",
]
