"""Question supply - input schemas, output payloads and validation."""

from .schemas import (
    QuestionPayload,
    SessionSupply,
    EventResultPayload,
    SessionSnapshot,
    SettlementPayload,
    EndReasonValue,
)
from .validation import (
    ValidationResult,
    validate_question_set,
    validate_stake,
    validate_session_inputs,
    build_questions,
    parse_supply,
    load_questions_file,
)

__all__ = [
    "QuestionPayload",
    "SessionSupply",
    "EventResultPayload",
    "SessionSnapshot",
    "SettlementPayload",
    "EndReasonValue",
    "ValidationResult",
    "validate_question_set",
    "validate_stake",
    "validate_session_inputs",
    "build_questions",
    "parse_supply",
    "load_questions_file",
]
