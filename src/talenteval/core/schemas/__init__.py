"""Pydantic schemas for API validation."""

from .evaluations import (
    Criterion,
    EvaluationCreate,
    EvaluationSchema,
    TemplateCreate,
    TemplateSchema,
    TemplateUpdate,
)
from .students import StudentCreate, StudentSchema, StudentUpdate
from .users import (
    ActivitySchema,
    Assignments,
    AuthUserSchema,
    LoginRequest,
    PasswordResetRequest,
    ProfileSchema,
    ProfileUpdate,
    RegisterRequest,
    RoleUpdate,
    SessionSchema,
    StatusUpdate,
    Team,
)

__all__ = [
    # Students
    "StudentCreate",
    "StudentUpdate",
    "StudentSchema",
    # Evaluations
    "Criterion",
    "TemplateCreate",
    "TemplateUpdate",
    "TemplateSchema",
    "EvaluationCreate",
    "EvaluationSchema",
    # Users
    "RegisterRequest",
    "LoginRequest",
    "PasswordResetRequest",
    "AuthUserSchema",
    "SessionSchema",
    "Team",
    "Assignments",
    "ProfileUpdate",
    "RoleUpdate",
    "StatusUpdate",
    "ProfileSchema",
    "ActivitySchema",
]
