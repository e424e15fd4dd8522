"""
Tests for rule configuration and logging setup.
"""

import logging

from ..config import RuleConfig, DEFAULT_RULES
from ..logging_config import configure_logging


class TestRuleConfig:
    """Tests for RuleConfig."""

    def test_defaults(self):
        assert DEFAULT_RULES.starting_lives == 2
        assert DEFAULT_RULES.grace_threshold == 4
        assert DEFAULT_RULES.question_time_limit == 30
        assert DEFAULT_RULES.advance_delay == 2
        assert DEFAULT_RULES.max_ladder_length == 15

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STREAK_GRACE_THRESHOLD", "6")
        monkeypatch.setenv("STREAK_STARTING_LIVES", "3")

        rules = RuleConfig.from_env()

        assert rules.grace_threshold == 6
        assert rules.starting_lives == 3
        assert rules.question_time_limit == 30

    def test_from_env_ignores_bad_values(self, monkeypatch):
        monkeypatch.setenv("STREAK_QUESTION_TIME_LIMIT", "soon")

        assert RuleConfig.from_env().question_time_limit == 30


class TestLogging:
    """Tests for configure_logging."""

    def test_returns_package_logger(self):
        logger = configure_logging(logging.DEBUG)

        assert logger.name == "streak"
        assert logging.getLogger().level == logging.DEBUG

    def test_accepts_level_names(self):
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_name_falls_back(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO
