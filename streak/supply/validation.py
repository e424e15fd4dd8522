"""
Supply Validation - Checks on the inputs a session is built from.

Validates that:
1. The question list is non-empty
2. Every question has unique options (at least two) and its correct
   answer is one of them
3. Question ids are unique within the set
4. The stake is finite, positive and, when a balance is known, affordable
5. The starting lives count is at least 1
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence
import json
import math

from pydantic import ValidationError

from ..engine_core.state import Question
from ..engine_core.errors import ConfigurationError
from .schemas import SessionSupply, QuestionPayload


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_question_set(questions: Sequence[Question]) -> ValidationResult:
    """
    Validate an ordered question set.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not questions:
        errors.append("Question list is empty")

    seen_ids: set[str] = set()
    for position, question in enumerate(questions, start=1):
        label = f"Question {position} ({question.question_id!r})"
        errors.extend(f"{label}: {e}" for e in _validate_question(question))

        if question.question_id in seen_ids:
            errors.append(f"{label}: duplicate question id")
        seen_ids.add(question.question_id)

        if len(question.options) == 2:
            warnings.append(f"{label}: only two options, 50/50 will not remove any")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_question(question: Question) -> list[str]:
    """Validate a single question."""
    errors = []
    if not question.text or not question.text.strip():
        errors.append("empty prompt text")
    if len(question.options) < 2:
        errors.append("needs at least two options")
    if len(set(question.options)) != len(question.options):
        errors.append("options are not unique")
    if question.correct_answer not in question.options:
        errors.append(f"correct answer {question.correct_answer!r} is not an option")
    return errors


def validate_stake(stake_amount: Any, balance: float | None = None) -> list[str]:
    """Check a stake amount, optionally against the player's balance."""
    if isinstance(stake_amount, bool) or not isinstance(stake_amount, (int, float)):
        return [f"Stake amount must be a number, got {stake_amount!r}"]
    if not math.isfinite(stake_amount):
        return [f"Stake amount must be finite, got {stake_amount!r}"]
    if stake_amount <= 0:
        return ["Stake amount must be greater than 0"]
    if balance is not None and stake_amount > balance:
        return [f"Stake amount {stake_amount} exceeds balance {balance}"]
    return []


def validate_session_inputs(
    questions: Sequence[Question],
    stake_amount: Any,
    lives: int,
    balance: float | None = None,
) -> None:
    """
    Validate everything a session is created from.

    Raises ConfigurationError listing every problem found.
    """
    errors = list(validate_question_set(questions).errors)
    errors.extend(validate_stake(stake_amount, balance))
    if isinstance(lives, bool) or not isinstance(lives, int) or lives < 1:
        errors.append(f"Starting lives must be an integer >= 1, got {lives!r}")

    if errors:
        raise ConfigurationError(errors)


def build_questions(raw_questions: list[dict[str, Any]]) -> list[Question]:
    """
    Convert supplier question dicts into Questions.

    Malformed payloads raise ConfigurationError.
    """
    try:
        payloads = [QuestionPayload.model_validate(q) for q in raw_questions]
    except ValidationError as e:
        raise ConfigurationError([_format_pydantic_error(err) for err in e.errors()]) from e
    return [p.to_question() for p in payloads]


def parse_supply(data: dict[str, Any]) -> tuple[SessionSupply, list[Question]]:
    """Parse a full session supply (questions + stake + lives)."""
    try:
        supply = SessionSupply.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError([_format_pydantic_error(err) for err in e.errors()]) from e
    return supply, [p.to_question() for p in supply.questions]


def load_questions_file(path: str | Path) -> list[Question]:
    """
    Load questions from a JSON file.

    The file holds either a bare list of questions or an object with a
    "questions" key (the supplier's response body).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError([f"{path}: invalid JSON ({e})"]) from e

    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ConfigurationError([f"{path}: expected a list of questions"])
    return build_questions(data)


def _format_pydantic_error(err: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err.get('msg', 'invalid value')}"
