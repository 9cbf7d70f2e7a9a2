"""
Local record store: students, evaluation templates and evaluations.

Every operation opens its own session and commits once. Store failures are
re-raised as domain errors (see talenteval.core.errors).

Student external identifiers are unique. add/update run a pre-check query
first; the unique index on students.student_code catches the writer that
loses a race between two concurrent check-then-write sequences.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from talenteval.core.errors import DuplicateIdentifierError, NotFoundError, StorageUnavailableError
from talenteval.core.models import Evaluation, EvaluationTemplate, Student
from talenteval.core.validation import (
    validate_activities,
    validate_criteria,
    validate_name,
    validate_scores,
    validate_student_code,
    validate_uuid,
)

logger = logging.getLogger(__name__)

DUPLICATE_STUDENT_MESSAGE = "Student ID already exists"


class RecordStore:
    """CRUD wrapper over the students, evaluation_templates and evaluations tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        """Open a session, translating database failures into domain errors."""
        try:
            async with self._session_factory() as session:
                yield session
        except IntegrityError as e:
            logger.warning(f"Integrity error while trying to {action}: {e.orig}")
            if "student_code" in str(e.orig).lower():
                raise DuplicateIdentifierError(DUPLICATE_STUDENT_MESSAGE) from e
            raise StorageUnavailableError(f"Failed to {action}") from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while trying to {action}: {e}")
            raise StorageUnavailableError(f"Failed to {action}") from e

    # ========================================================================
    # Students
    # ========================================================================

    async def student_code_exists(self, student_code: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another student already holds this external identifier.

        Args:
            student_code: External identifier to look for
            exclude_id: Internal key of the student being updated (skipped)
        """
        async with self._session("check student ID") as session:
            return await self._code_taken(session, student_code, exclude_id)

    @staticmethod
    async def _code_taken(
        session: AsyncSession, student_code: str, exclude_id: UUID | None
    ) -> bool:
        stmt = select(Student.id).where(Student.student_code == student_code)
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def add_student(self, data: Mapping[str, Any]) -> UUID:
        """Insert a student and return its generated internal key.

        Raises:
            DuplicateIdentifierError: If the student ID is already taken
            ValidationFailureError: If the code or name is missing
        """
        student_code = validate_student_code(data.get("student_code"))
        name = validate_name(data.get("name"))
        activities = validate_activities(data.get("activities"))

        async with self._session("add student") as session:
            if await self._code_taken(session, student_code, None):
                raise DuplicateIdentifierError(DUPLICATE_STUDENT_MESSAGE)

            student = Student(
                student_code=student_code,
                name=name,
                grade=str(data.get("grade") or ""),
                activities=activities,
            )
            session.add(student)
            await session.commit()

        logger.info(f"Student added: {student.id}", extra={"student_code": student_code})
        return student.id

    async def get_all_students(self) -> list[Student]:
        async with self._session("fetch students") as session:
            result = await session.execute(select(Student).order_by(Student.name))
            return list(result.scalars().all())

    async def get_student(self, student_id: UUID) -> Student | None:
        async with self._session("fetch student") as session:
            return await session.get(Student, student_id)

    async def update_student(self, student_id: UUID, data: Mapping[str, Any]) -> None:
        """Replace a student's fields.

        Raises:
            DuplicateIdentifierError: If the new student ID belongs to another student
            NotFoundError: If the student does not exist
        """
        student_code = validate_student_code(data.get("student_code"))
        name = validate_name(data.get("name"))
        activities = validate_activities(data.get("activities"))

        async with self._session("update student") as session:
            student = await session.get(Student, student_id)
            if student is None:
                raise NotFoundError(f"Student not found with ID: {student_id}")

            if await self._code_taken(session, student_code, student_id):
                raise DuplicateIdentifierError(DUPLICATE_STUDENT_MESSAGE)

            student.student_code = student_code
            student.name = name
            student.grade = str(data.get("grade") or "")
            student.activities = activities
            student.updated_at = datetime.now(UTC)
            await session.commit()

    async def delete_student(self, student_id: UUID) -> None:
        async with self._session("delete student") as session:
            student = await session.get(Student, student_id)
            if student is None:
                raise NotFoundError(f"Student not found with ID: {student_id}")
            await session.delete(student)
            await session.commit()

        logger.info(f"Student deleted: {student_id}")

    # ========================================================================
    # Evaluation Templates
    # ========================================================================

    async def add_template(self, data: Mapping[str, Any]) -> UUID:
        """Insert a template and return its generated key."""
        name = validate_name(data.get("name"), field="Template name")
        criteria = validate_criteria(data.get("criteria"))

        async with self._session("add template") as session:
            template = EvaluationTemplate(
                name=name,
                sport_type=str(data.get("sport_type") or ""),
                grade_level=str(data.get("grade_level") or ""),
                criteria=criteria,
            )
            session.add(template)
            await session.commit()

        logger.info(f"Template added: {template.id}", extra={"criteria": len(criteria)})
        return template.id

    async def get_all_templates(self) -> list[EvaluationTemplate]:
        async with self._session("fetch templates") as session:
            result = await session.execute(
                select(EvaluationTemplate).order_by(EvaluationTemplate.created_at)
            )
            return list(result.scalars().all())

    async def get_template(self, template_id: UUID) -> EvaluationTemplate | None:
        async with self._session("fetch template") as session:
            return await session.get(EvaluationTemplate, template_id)

    async def update_template(self, template_id: UUID, data: Mapping[str, Any]) -> None:
        """Update a template; the criteria list replaces the stored one."""
        name = validate_name(data.get("name"), field="Template name")
        criteria = validate_criteria(data.get("criteria"))

        async with self._session("update template") as session:
            template = await session.get(EvaluationTemplate, template_id)
            if template is None:
                raise NotFoundError(f"Template not found with ID: {template_id}")

            template.name = name
            template.sport_type = str(data.get("sport_type") or "")
            template.grade_level = str(data.get("grade_level") or "")
            template.criteria = criteria
            template.updated_at = datetime.now(UTC)
            await session.commit()

    async def delete_template(self, template_id: UUID) -> None:
        async with self._session("delete template") as session:
            template = await session.get(EvaluationTemplate, template_id)
            if template is None:
                raise NotFoundError(f"Template not found with ID: {template_id}")
            await session.delete(template)
            await session.commit()

    # ========================================================================
    # Evaluations
    # ========================================================================

    async def add_evaluation(self, data: Mapping[str, Any]) -> UUID:
        """Record an evaluation. Student and template references are not checked."""
        student_id = validate_uuid(data.get("student_id"), field="Student reference")
        template_id = validate_uuid(data.get("template_id"), field="Template reference")
        scores = validate_scores(data.get("scores"))
        evaluator = validate_name(data.get("evaluator"), field="Evaluator")
        now = datetime.now(UTC)

        async with self._session("add evaluation") as session:
            evaluation = Evaluation(
                student_id=student_id,
                template_id=template_id,
                evaluator=evaluator,
                scores=scores,
                comments=dict(data.get("comments") or {}),
                date=now,
                created_at=now,
            )
            session.add(evaluation)
            await session.commit()

        logger.info(
            f"Evaluation added: {evaluation.id}",
            extra={"student_id": str(evaluation.student_id), "criteria": len(scores)},
        )
        return evaluation.id

    async def get_student_evaluations(self, student_id: UUID) -> list[Evaluation]:
        async with self._session("fetch evaluations") as session:
            result = await session.execute(
                select(Evaluation).where(Evaluation.student_id == student_id).order_by(Evaluation.date)
            )
            return list(result.scalars().all())

    async def get_all_evaluations(self) -> list[Evaluation]:
        async with self._session("fetch evaluations") as session:
            result = await session.execute(select(Evaluation).order_by(Evaluation.date))
            return list(result.scalars().all())
