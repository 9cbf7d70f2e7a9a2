"""
Report Export API Endpoints

Downloadable PDF and spreadsheet reports.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from datetime import date
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from talenteval.api.deps import get_record_store, require_active_profile
from talenteval.export import (
    ExportedFile,
    StudentReport,
    compute_team_stats,
    export_student_report,
    export_team_report,
)
from talenteval.storage.records import RecordStore

router = APIRouter(dependencies=[Depends(require_active_profile)])

ExportFormat = Literal["pdf", "xlsx"]


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.get("/students/{student_id}")
async def student_report(
    student_id: UUID,
    format: ExportFormat = Query("pdf"),
    store: RecordStore = Depends(get_record_store),
) -> Response:
    """Evaluation history of one student."""
    student = await store.get_student(student_id)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Student not found with ID: {student_id}",
        )

    evaluations = await store.get_student_evaluations(student_id)
    exported = export_student_report(StudentReport(student, evaluations), format, date.today())
    return _download(exported)


@router.get("/team")
async def team_report(
    format: ExportFormat = Query("pdf"),
    store: RecordStore = Depends(get_record_store),
) -> Response:
    """Aggregate statistics across all students and evaluations."""
    students = await store.get_all_students()
    evaluations = await store.get_all_evaluations()
    exported = export_team_report(compute_team_stats(students, evaluations), format, date.today())
    return _download(exported)
