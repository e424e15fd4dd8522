"""Streak test suite."""
