"""
Evaluation Schemas

Templates, criteria and submitted evaluations.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Criterion(BaseModel):
    """A single scoring criterion within a template."""

    key: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None


class TemplateBase(BaseModel):
    """Base template schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200)
    sport_type: str = Field(default="", max_length=100)
    grade_level: str = Field(default="", max_length=20)
    criteria: list[Criterion] = Field(default_factory=list)


class TemplateCreate(TemplateBase):
    """Schema for creating a template."""

    pass


class TemplateUpdate(TemplateBase):
    """Schema for updating a template. Criteria are replaced wholesale."""

    pass


class TemplateSchema(TemplateBase):
    """Full template schema for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class EvaluationCreate(BaseModel):
    """Schema for submitting an evaluation."""

    student_id: UUID
    template_id: UUID
    evaluator: str = Field(..., min_length=1, max_length=200)
    scores: dict[str, float] = Field(..., description="Criterion key -> score")
    comments: dict[str, str] = Field(default_factory=dict)


class EvaluationSchema(EvaluationCreate):
    """Full evaluation schema for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: datetime
    created_at: datetime
