"""
User Models

User profiles keyed by identity-provider user id, role assignments and the
append-only activity log.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from talenteval.core.roles import DEFAULT_ROLE, DEFAULT_STATUS

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, dump_json, load_json


class UserProfile(Base, TimestampMixin):
    """Profile of an authenticated user (teacher, coach or administrator)."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('ADMIN', 'TEACHER', 'COACH')", name="check_role"),
        CheckConstraint("status IN ('pending', 'active', 'inactive')", name="check_status"),
        Index("idx_users_email", "email"),
        Index("idx_users_role", "role"),
        Index("idx_users_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(128), primary_key=True, comment="Identity provider uid")
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    display_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_ROLE.value)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_STATUS.value)

    assignments_raw: Mapped[str] = mapped_column(
        "assignments", Text, nullable=False, default="{}", comment="Assignment data as JSON"
    )

    @property
    def assignments(self) -> dict[str, Any]:
        """Assignment data: {"students": [...], "teams": [{"name", "students"}]}."""
        return dict(load_json(self.assignments_raw, {}))

    @assignments.setter
    def assignments(self, value: dict[str, Any] | None) -> None:
        self.assignments_raw = dump_json(dict(value or {}))

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, email='{self.email}', role={self.role}, status={self.status})>"


class Assignment(Base):
    """Students and teams assigned to a teacher or coach."""

    __tablename__ = "assignments"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    students_raw: Mapped[str] = mapped_column("students", Text, nullable=False, default="[]")
    teams_raw: Mapped[str] = mapped_column("teams", Text, nullable=False, default="[]")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    @property
    def students(self) -> list[str]:
        return list(load_json(self.students_raw, []))

    @students.setter
    def students(self, value: list[str] | None) -> None:
        self.students_raw = dump_json(list(value or []))

    @property
    def teams(self) -> list[dict[str, Any]]:
        return list(load_json(self.teams_raw, []))

    @teams.setter
    def teams(self, value: list[dict[str, Any]] | None) -> None:
        self.teams_raw = dump_json(list(value or []))

    def covers(self, student_id: str) -> bool:
        """Whether the student is assigned directly or through any team."""
        if student_id in self.students:
            return True
        return any(student_id in (team.get("students") or []) for team in self.teams)


class ActivityLogEntry(Base, UUIDPrimaryKeyMixin):
    """Audit trail entry for a profile-affecting action. Never updated or deleted."""

    __tablename__ = "activities"
    __table_args__ = (
        Index("idx_activities_user", "user_id"),
        Index("idx_activities_timestamp", "timestamp"),
    )

    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    details_raw: Mapped[str] = mapped_column("details", Text, nullable=False, default="{}")
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    @property
    def details(self) -> dict[str, Any]:
        return dict(load_json(self.details_raw, {}))

    @details.setter
    def details(self, value: dict[str, Any] | None) -> None:
        self.details_raw = dump_json(dict(value or {}))
