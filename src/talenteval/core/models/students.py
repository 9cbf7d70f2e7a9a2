"""
Student Model

Student records kept by teachers and coaches.
"""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, dump_json, load_json


class Student(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A student under evaluation.

    `id` is the internal key; `student_code` is the externally assigned
    identifier, unique across all students.
    """

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_students_name", "name"),
        Index("idx_students_grade", "grade"),
    )

    student_code: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, comment="Externally assigned student identifier"
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    grade: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    activities_raw: Mapped[str] = mapped_column(
        "activities", Text, nullable=False, default="[]", comment="Ordered activity names as JSON"
    )

    @property
    def activities(self) -> list[str]:
        """Ordered list of activity names."""
        return list(load_json(self.activities_raw, []))

    @activities.setter
    def activities(self, value: list[str] | None) -> None:
        self.activities_raw = dump_json(list(value or []))

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, code='{self.student_code}', name='{self.name}')>"
