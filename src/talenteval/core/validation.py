"""
Input validation functions for store writes.

All validation functions follow the pattern:
1. Accept raw input
2. Normalize/clean it
3. Validate against business rules
4. Return the cleaned value or raise ValidationFailureError
"""

import math
import re
from typing import Any
from uuid import UUID

from talenteval.core.errors import ValidationFailureError
from talenteval.core.roles import ProfileStatus, Role

# ============================================================================
# Student Fields
# ============================================================================


def validate_student_code(code: str | None) -> str:
    """
    Validate and normalize an externally assigned student identifier.

    Surrounding whitespace is stripped; the code is otherwise kept as given
    (comparison is exact).

    Raises:
        ValidationFailureError: If the code is empty or too long
    """
    if code is None:
        raise ValidationFailureError("Student ID cannot be empty")

    cleaned = str(code).strip()
    if cleaned == "":
        raise ValidationFailureError("Student ID cannot be empty")

    if len(cleaned) > 50:
        raise ValidationFailureError("Student ID cannot exceed 50 characters")

    return cleaned


def validate_name(name: str | None, field: str = "Name", max_length: int = 200) -> str:
    """
    Validate and normalize a display name.

    Collapses runs of whitespace to a single space.

    Raises:
        ValidationFailureError: If the name is empty or too long
    """
    if name is None or str(name).strip() == "":
        raise ValidationFailureError(f"{field} cannot be empty")

    cleaned = re.sub(r"\s+", " ", str(name).strip())

    if len(cleaned) > max_length:
        raise ValidationFailureError(f"{field} cannot exceed {max_length} characters")

    return cleaned


def validate_activities(activities: Any) -> list[str]:
    """Validate an ordered list of activity names, dropping blank entries."""
    if activities is None:
        return []
    if not isinstance(activities, list | tuple):
        raise ValidationFailureError("Activities must be a list")
    return [str(a).strip() for a in activities if str(a).strip()]


# ============================================================================
# Evaluation Fields
# ============================================================================


def validate_scores(scores: Any) -> dict[str, float]:
    """
    Validate a criterion-key -> score mapping.

    Raises:
        ValidationFailureError: If the mapping is missing, empty, or holds a
            non-numeric score
    """
    if not isinstance(scores, dict) or not scores:
        raise ValidationFailureError("Scores must be a non-empty mapping")

    cleaned: dict[str, float] = {}
    for key, value in scores.items():
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ValidationFailureError(f"Score for '{key}' must be a number")
        if math.isnan(value) or math.isinf(value):
            raise ValidationFailureError(f"Score for '{key}' must be a finite number")
        cleaned[str(key)] = value

    return cleaned


def validate_uuid(value: Any, field: str = "Reference") -> UUID:
    """Coerce a record reference to a UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ValidationFailureError(f"{field} must be a valid ID") from e


def validate_criteria(criteria: Any) -> list[dict[str, Any]]:
    """Validate template criteria; each entry needs a key and a name."""
    if criteria is None:
        return []
    if not isinstance(criteria, list | tuple):
        raise ValidationFailureError("Criteria must be a list")

    cleaned = []
    for index, criterion in enumerate(criteria):
        if not isinstance(criterion, dict) or not criterion.get("key") or not criterion.get("name"):
            raise ValidationFailureError(f"Criterion {index + 1} needs a key and a name")
        cleaned.append(dict(criterion))
    return cleaned


# ============================================================================
# Profile Fields
# ============================================================================

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str | None) -> str:
    """
    Validate and normalize an email address (lowercased).

    Raises:
        ValidationFailureError: If the address is empty or malformed
    """
    if email is None or str(email).strip() == "":
        raise ValidationFailureError("Email cannot be empty")

    cleaned = str(email).strip().lower()
    if not _EMAIL_RE.match(cleaned):
        raise ValidationFailureError("Invalid email address")

    return cleaned


def validate_role(role: str | None) -> Role:
    """Parse a role name (ADMIN, TEACHER, COACH)."""
    try:
        return Role(str(role).upper())
    except ValueError as e:
        raise ValidationFailureError(f"Unknown role: {role}") from e


def validate_status(status: str | None) -> ProfileStatus:
    """Parse a profile status (pending, active, inactive)."""
    try:
        return ProfileStatus(str(status).lower())
    except ValueError as e:
        raise ValidationFailureError(f"Unknown status: {status}") from e
