"""
Unit tests for input validation functions.
"""

import math
from uuid import uuid4

import pytest

from talenteval.core.errors import ValidationFailureError
from talenteval.core.roles import ProfileStatus, Role
from talenteval.core.validation import (
    validate_activities,
    validate_criteria,
    validate_email,
    validate_name,
    validate_role,
    validate_scores,
    validate_status,
    validate_student_code,
    validate_uuid,
)

# ============================================================================
# Student Fields
# ============================================================================


class TestStudentCodeValidation:
    def test_strips_whitespace(self):
        assert validate_student_code("  S-001 ") == "S-001"

    def test_case_is_preserved(self):
        assert validate_student_code("ab-12") == "ab-12"

    @pytest.mark.parametrize("code", [None, "", "   "])
    def test_reject_empty(self, code):
        with pytest.raises(ValidationFailureError, match="cannot be empty"):
            validate_student_code(code)

    def test_reject_too_long(self):
        with pytest.raises(ValidationFailureError, match="cannot exceed 50"):
            validate_student_code("x" * 51)


class TestNameValidation:
    def test_collapses_whitespace(self):
        assert validate_name("  Ana   Li ") == "Ana Li"

    def test_reject_empty_uses_field_label(self):
        with pytest.raises(ValidationFailureError, match="Template name cannot be empty"):
            validate_name("", field="Template name")


def test_activities_drop_blank_entries():
    assert validate_activities(["Soccer", " ", "Chess "]) == ["Soccer", "Chess"]
    assert validate_activities(None) == []

    with pytest.raises(ValidationFailureError):
        validate_activities("Soccer")


# ============================================================================
# Evaluation Fields
# ============================================================================


class TestScoresValidation:
    def test_accepts_ints_and_floats(self):
        assert validate_scores({"a": 4, "b": 3.5}) == {"a": 4, "b": 3.5}

    @pytest.mark.parametrize("scores", [None, {}, []])
    def test_reject_missing_or_empty(self, scores):
        with pytest.raises(ValidationFailureError, match="non-empty"):
            validate_scores(scores)

    @pytest.mark.parametrize("value", ["4", True, None])
    def test_reject_non_numeric(self, value):
        with pytest.raises(ValidationFailureError, match="must be a number"):
            validate_scores({"a": value})

    @pytest.mark.parametrize("value", [math.nan, math.inf])
    def test_reject_non_finite(self, value):
        with pytest.raises(ValidationFailureError, match="finite"):
            validate_scores({"a": value})


def test_validate_uuid():
    value = uuid4()

    assert validate_uuid(value) == value
    assert validate_uuid(str(value)) == value
    with pytest.raises(ValidationFailureError, match="Student reference must be a valid ID"):
        validate_uuid("nope", field="Student reference")


def test_validate_criteria_requires_key_and_name():
    assert validate_criteria(None) == []
    assert validate_criteria([{"key": "a", "name": "A"}]) == [{"key": "a", "name": "A"}]

    with pytest.raises(ValidationFailureError, match="Criterion 2"):
        validate_criteria([{"key": "a", "name": "A"}, {"key": "b"}])


# ============================================================================
# Profile Fields
# ============================================================================


def test_validate_email_lowercases():
    assert validate_email(" Coach@School.EDU ") == "coach@school.edu"

    with pytest.raises(ValidationFailureError, match="Invalid email"):
        validate_email("not-an-email")


def test_validate_role_and_status():
    assert validate_role("coach") is Role.COACH
    assert validate_status("ACTIVE") is ProfileStatus.ACTIVE

    with pytest.raises(ValidationFailureError, match="Unknown role"):
        validate_role("PRINCIPAL")
    with pytest.raises(ValidationFailureError, match="Unknown status"):
        validate_status("banned")
