"""
Student Schemas

Pydantic models for API request/response validation.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class StudentBase(BaseModel):
    """Base student schema with common fields."""

    student_code: str = Field(
        ..., min_length=1, max_length=50, description="Externally assigned student identifier"
    )
    name: str = Field(..., min_length=1, max_length=200)
    grade: str = Field(default="", max_length=20)
    activities: list[str] = Field(default_factory=list, description="Ordered activity names")


class StudentCreate(StudentBase):
    """Schema for creating a new student."""

    pass


class StudentUpdate(StudentBase):
    """Schema for replacing a student's fields."""

    pass


class StudentSchema(StudentBase):
    """Full student schema for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
