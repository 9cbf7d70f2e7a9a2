"""
Evaluation Models

Evaluation templates (scoring criteria per sport and grade) and the
evaluations submitted against them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, dump_json, load_json


class EvaluationTemplate(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Scoring template; criteria are replaced wholesale on update."""

    __tablename__ = "evaluation_templates"
    __table_args__ = (
        Index("idx_templates_name", "name"),
        Index("idx_templates_sport_type", "sport_type"),
        Index("idx_templates_grade_level", "grade_level"),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sport_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    grade_level: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    criteria_raw: Mapped[str] = mapped_column(
        "criteria", Text, nullable=False, default="[]", comment="Ordered criteria as JSON"
    )

    @property
    def criteria(self) -> list[dict[str, Any]]:
        """Ordered scoring criteria ({key, name, description})."""
        return list(load_json(self.criteria_raw, []))

    @criteria.setter
    def criteria(self, value: list[dict[str, Any]] | None) -> None:
        self.criteria_raw = dump_json(list(value or []))


class Evaluation(Base, UUIDPrimaryKeyMixin):
    """A submitted evaluation of one student against one template.

    Student and template references are not validated against existing rows.
    """

    __tablename__ = "evaluations"
    __table_args__ = (
        Index("idx_evaluations_student", "student_id"),
        Index("idx_evaluations_template", "template_id"),
        Index("idx_evaluations_date", "date"),
        Index("idx_evaluations_evaluator", "evaluator"),
    )

    student_id: Mapped[UUID] = mapped_column(nullable=False, comment="Internal student key")
    template_id: Mapped[UUID] = mapped_column(nullable=False, comment="Template key")
    evaluator: Mapped[str] = mapped_column(String(200), nullable=False)

    scores_raw: Mapped[str] = mapped_column("scores", Text, nullable=False, default="{}")
    comments_raw: Mapped[str] = mapped_column("comments", Text, nullable=False, default="{}")

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    @property
    def scores(self) -> dict[str, float]:
        """Criterion key -> numeric score."""
        return dict(load_json(self.scores_raw, {}))

    @scores.setter
    def scores(self, value: dict[str, float] | None) -> None:
        self.scores_raw = dump_json(dict(value or {}))

    @property
    def comments(self) -> dict[str, str]:
        """Criterion key -> free-text comment."""
        return dict(load_json(self.comments_raw, {}))

    @comments.setter
    def comments(self, value: dict[str, str] | None) -> None:
        self.comments_raw = dump_json(dict(value or {}))
