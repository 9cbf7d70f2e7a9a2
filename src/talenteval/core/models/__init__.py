"""
Talent Evaluation SQLAlchemy Models
"""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .evaluations import Evaluation, EvaluationTemplate
from .students import Student
from .users import ActivityLogEntry, Assignment, UserProfile

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    # Records
    "Student",
    "EvaluationTemplate",
    "Evaluation",
    # Users
    "UserProfile",
    "Assignment",
    "ActivityLogEntry",
]
