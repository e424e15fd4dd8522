"""
Rule configuration - tunable constants of the streak game.

The defaults reproduce the production game:
- 2 starting lives
- a wrong answer costs a life only while the question index is below 4
- 30 seconds per question, 2 seconds between a resolution and the next question

Every field can be overridden from the environment (STREAK_* variables).
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import os

STREAK_LOG_LEVEL = os.getenv("STREAK_LOG_LEVEL", "INFO")


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class RuleConfig:
    """
    Rule constants for one session.

    grace_threshold is exclusive: a wrong answer on question index i
    costs a life (instead of ending the session) only when i < grace_threshold.
    """
    starting_lives: int = 2
    grace_threshold: int = 4
    question_time_limit: int = 30
    advance_delay: int = 2
    max_ladder_length: int = 15

    @classmethod
    def from_env(cls, prefix: str = "STREAK_") -> RuleConfig:
        """
        Build a config from environment variables.

        STREAK_STARTING_LIVES, STREAK_GRACE_THRESHOLD, ... override the
        matching field. Unparseable values fall back to the default.
        """
        defaults = cls()
        overrides = {
            f.name: _parse_int_env(prefix + f.name.upper(), getattr(defaults, f.name))
            for f in fields(cls)
        }
        return cls(**overrides)


DEFAULT_RULES = RuleConfig()
