"""
Tests for question supply schemas and validation.

Validates that:
- Supplier payloads parse into Questions
- Malformed question sets are caught before a session starts
- Output payloads serialize correctly
"""

import json

import pytest
from pydantic import ValidationError

from ..engine_core.errors import ConfigurationError
from ..engine_core.engine import SessionEngine
from ..session.settlement import Settlement
from ..supply import (
    QuestionPayload,
    EventResultPayload,
    SessionSnapshot,
    SettlementPayload,
    validate_question_set,
    validate_stake,
    build_questions,
    parse_supply,
    load_questions_file,
)
from .helpers import make_question, first_choice, answer_correctly


RAW_QUESTION = {
    "id": 7,
    "text": "What is the capital of Nigeria?",
    "options": ["Lagos", "Abuja", "Kano", "Jos"],
    "correctAnswer": "Abuja",
    "category": "Geography",
    "difficulty": "easy",
}


class TestQuestionPayload:
    """Tests for supplier question payloads."""

    def test_camel_case_keys(self):
        payload = QuestionPayload.model_validate(RAW_QUESTION)
        question = payload.to_question()

        assert question.question_id == "7"
        assert question.correct_answer == "Abuja"
        assert question.options == ("Lagos", "Abuja", "Kano", "Jos")
        assert question.category == "Geography"

    def test_snake_case_keys(self):
        payload = QuestionPayload(
            id="x", text="Q?", options=["a", "b"], correct_answer="b"
        )
        assert payload.to_question().correct_answer == "b"
        assert payload.category is None

    def test_missing_correct_answer(self):
        with pytest.raises(ValidationError):
            QuestionPayload.model_validate({"id": 1, "text": "Q?", "options": ["a", "b"]})


class TestQuestionSetValidation:
    """Tests for validate_question_set."""

    def test_valid_set(self):
        result = validate_question_set([make_question(1), make_question(2)])
        assert result.valid
        assert result.errors == []

    def test_empty_set(self):
        result = validate_question_set([])
        assert not result.valid

    def test_duplicate_options(self):
        result = validate_question_set([make_question(1, options=["a", "a", "b"], correct="b")])
        assert any("not unique" in e for e in result.errors)

    def test_correct_answer_not_an_option(self):
        result = validate_question_set([make_question(1, options=["a", "b"], correct="c")])
        assert any("not an option" in e for e in result.errors)

    def test_single_option(self):
        result = validate_question_set([make_question(1, options=["a"])])
        assert any("at least two" in e for e in result.errors)

    def test_duplicate_ids(self):
        result = validate_question_set([make_question(1), make_question(1)])
        assert any("duplicate question id" in e for e in result.errors)

    def test_two_options_warns(self):
        result = validate_question_set([make_question(1, options=["yes", "no"])])
        assert result.valid
        assert len(result.warnings) == 1


class TestStakeValidation:
    """Tests for validate_stake."""

    @pytest.mark.parametrize("stake", [1, 0.5, 1000])
    def test_positive_stakes(self, stake):
        assert validate_stake(stake) == []

    @pytest.mark.parametrize(
        "stake", [0, -1, "100", None, True, float("nan"), float("inf"), float("-inf")]
    )
    def test_invalid_stakes(self, stake):
        assert validate_stake(stake) != []

    def test_non_finite_stake_message(self):
        assert "finite" in validate_stake(float("nan"))[0]

    def test_balance_check(self):
        assert validate_stake(100, balance=100) == []
        assert validate_stake(101, balance=100) != []


class TestBuildingQuestions:
    """Tests for converting raw payloads."""

    def test_build_questions(self):
        questions = build_questions([RAW_QUESTION])
        assert questions[0].text == "What is the capital of Nigeria?"

    def test_malformed_payload_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_questions([{"id": 1, "text": "Q?"}])
        assert any("options" in e for e in exc_info.value.errors)

    def test_parse_supply(self):
        supply, questions = parse_supply({
            "stakeAmount": 250,
            "lives": 3,
            "questions": [RAW_QUESTION],
        })
        assert supply.stake_amount == 250
        assert supply.lives == 3
        assert supply.session_id is None
        assert len(questions) == 1

    def test_parse_supply_missing_stake(self):
        with pytest.raises(ConfigurationError):
            parse_supply({"questions": [RAW_QUESTION]})

    def test_load_questions_file(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"sessionId": "s", "questions": [RAW_QUESTION]}))

        questions = load_questions_file(path)

        assert [q.question_id for q in questions] == ["7"]

    @pytest.mark.parametrize("stake", ["NaN", "inf", "-Infinity"])
    def test_parse_supply_non_finite_stake(self, stake):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_supply({"stakeAmount": stake, "questions": [RAW_QUESTION]})
        assert any("stakeAmount" in e for e in exc_info.value.errors)

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_questions_file(path)
        assert "invalid JSON" in exc_info.value.errors[0]

    def test_load_bare_list(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([RAW_QUESTION]))

        assert len(load_questions_file(path)) == 1

    def test_load_wrong_shape(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps("nope"))

        with pytest.raises(ConfigurationError):
            load_questions_file(path)


class TestOutputPayloads:
    """Tests for result, snapshot and settlement payloads."""

    @pytest.fixture
    def engine(self):
        questions = build_questions([
            RAW_QUESTION,
            {**RAW_QUESTION, "id": 8},
        ])
        return SessionEngine.create(questions, stake_amount=1000, choose=first_choice)

    def test_event_result_payload(self, engine):
        result = engine.submit_answer("Abuja")

        data = EventResultPayload.from_result(result).model_dump()

        assert data["success"] is True
        assert data["correct"] is True
        assert data["streak"] == 1
        assert data["running_balance"] == 200
        assert data["ended"] is False
        assert data["end_reason"] is None

    def test_rejected_event_payload(self, engine):
        result = engine.request_cashout()

        data = EventResultPayload.from_result(result).model_dump(mode="json")

        assert data["success"] is False
        assert data["error_code"] == "CASHOUT_INELIGIBLE"

    def test_ended_event_payload(self, engine):
        answer_correctly(engine, 2)

        payload = EventResultPayload.from_result(engine.request_cashout())
        assert payload.success is False

        snapshot = SessionSnapshot.from_state(engine.state).model_dump(mode="json")
        assert snapshot["status"] == "ended"
        assert snapshot["end_reason"] == "completed"
        assert snapshot["final_payout"] == 600
        assert snapshot["question_text"] is None

    def test_snapshot_in_progress(self, engine):
        engine.apply_fifty_fifty()

        snapshot = SessionSnapshot.from_state(engine.state)

        assert snapshot.question_number == 1
        assert snapshot.total_questions == 2
        assert snapshot.visible_options == ["Lagos", "Abuja"]
        assert snapshot.fifty_fifty_used
        assert snapshot.display_prize == 200
        assert snapshot.cashout_amount == 0

    def test_settlement_payload(self, engine):
        answer_correctly(engine, 2)
        settlement = Settlement.from_state(engine.state)

        data = SettlementPayload.from_settlement(settlement).model_dump(mode="json")

        assert data["end_reason"] == "completed"
        assert data["final_payout"] == 600
        assert data["questions_answered"] == 2
        assert data["net_change"] == -400
