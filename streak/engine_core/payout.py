"""
Prize & Payout Rules - Pure functions of streak length and stake.

Tiers on the streak c:
- Display prize:   c == 0 -> 20% of stake, c >= 1 -> 20% x c
- Cashout:         c < 5 -> 0, c == 5 -> 50%, 6..9 -> running balance,
                   c >= 10 -> 50% + 80% + 30% per question from the 10th on
- Failure payout:  c < 5 -> 0, 5..9 -> 50%, c >= 10 -> exactly the stake

The failure payout for long streaks is deliberately capped at the stake:
a player who fails instead of cashing out forfeits the streak bonus.

All amounts are whole currency units rounded half-up.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

PRIZE_RATE = Decimal("0.2")
BASE_CASHOUT_RATE = Decimal("0.5")
MID_TIER_RATE = Decimal("0.8")
LONG_STREAK_RATE = Decimal("0.3")

CASHOUT_STREAK = 5
LONG_STREAK = 10


def round_money(value: Decimal | int | float) -> int:
    """Round half-up to a whole currency unit."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _portion(stake: int | float, rate: Decimal, multiplier: int = 1) -> int:
    return round_money(Decimal(str(stake)) * rate * multiplier)


def display_prize(stake: int | float, streak: int) -> int:
    """Prize shown for (and credited by) a correct answer at this streak."""
    if streak <= 0:
        return _portion(stake, PRIZE_RATE)
    return _portion(stake, PRIZE_RATE, streak)


def cashout_amount(stake: int | float, streak: int, running_balance: int) -> int:
    """
    Amount obtainable by cashing out right now.

    Between 6 and 9 the amount is whatever has been credited question by
    question, so the caller must pass the running balance.
    """
    if streak < CASHOUT_STREAK:
        return 0
    if streak == CASHOUT_STREAK:
        return _portion(stake, BASE_CASHOUT_RATE)
    if streak < LONG_STREAK:
        return running_balance
    return (
        _portion(stake, BASE_CASHOUT_RATE)
        + _portion(stake, MID_TIER_RATE)
        + _portion(stake, LONG_STREAK_RATE, streak - (LONG_STREAK - 1))
    )


def failure_payout(stake: int | float, streak: int) -> int:
    """Amount paid when the session ends by a wrong answer or timeout."""
    if streak < CASHOUT_STREAK:
        return 0
    if streak < LONG_STREAK:
        return _portion(stake, BASE_CASHOUT_RATE)
    return round_money(stake)


def completion_payout(running_balance: int) -> int:
    """
    Amount paid when the questions run out with the session still alive.

    A surviving player keeps everything credited during play.
    """
    return running_balance


def prize_ladder(stake: int | float, length: int = 15) -> list[int]:
    """Display prizes for streaks 1..length (the winnings ladder)."""
    return [display_prize(stake, streak) for streak in range(1, length + 1)]
