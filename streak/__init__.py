"""
Streak - Stake-Based Trivia Streak Engine

A deterministic, rules-driven engine for stake-based trivia sessions.
The engine takes an ordered question set, a stake and a number of lives and provides:
- Session state management
- Streak tracking and escalating prize computation
- One-shot lifelines (50/50, skip)
- Cashout and terminal payout resolution
"""

__version__ = "0.1.0"
