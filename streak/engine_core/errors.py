"""
Engine errors.

InvalidEvent: an event arrived whose preconditions do not hold.
Session state is left untouched; the caller may render a message and carry on.

ConfigurationError: the session could not be built (bad question set,
stake or lives). Raised before any event is accepted.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .action import RejectionCode


class InvalidEvent(Exception):
    """Raised (in strict mode) when an event is rejected."""

    def __init__(self, message: str, code: RejectionCode | None = None):
        self.code = code
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised when a session cannot be created from the supplied inputs."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        detail = "; ".join(errors)
        super().__init__(f"Session configuration invalid with {len(errors)} error(s): {detail}")
