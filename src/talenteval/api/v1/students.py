"""
Student API Endpoints

Student record management for teachers and coaches.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from talenteval.api.deps import get_record_store, require_active_profile
from talenteval.core.models import Evaluation, Student
from talenteval.core.schemas import EvaluationSchema, StudentCreate, StudentSchema, StudentUpdate
from talenteval.storage.records import RecordStore

router = APIRouter(dependencies=[Depends(require_active_profile)])


async def _get_or_404(store: RecordStore, student_id: UUID) -> Student:
    student = await store.get_student(student_id)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Student not found with ID: {student_id}",
        )
    return student


@router.post("/", response_model=StudentSchema, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate, store: RecordStore = Depends(get_record_store)
) -> Student:
    """Add a student. The student ID must not be in use."""
    student_id = await store.add_student(student_data.model_dump())
    return await _get_or_404(store, student_id)


@router.get("/", response_model=list[StudentSchema])
async def list_students(store: RecordStore = Depends(get_record_store)) -> list[Student]:
    return await store.get_all_students()


@router.get("/{student_id}", response_model=StudentSchema)
async def get_student(student_id: UUID, store: RecordStore = Depends(get_record_store)) -> Student:
    return await _get_or_404(store, student_id)


@router.put("/{student_id}", response_model=StudentSchema)
async def update_student(
    student_id: UUID, student_update: StudentUpdate, store: RecordStore = Depends(get_record_store)
) -> Student:
    """Replace a student's fields. Keeping the same student ID is allowed."""
    await store.update_student(student_id, student_update.model_dump())
    return await _get_or_404(store, student_id)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: UUID, store: RecordStore = Depends(get_record_store)) -> None:
    await store.delete_student(student_id)


@router.get("/{student_id}/evaluations", response_model=list[EvaluationSchema])
async def list_student_evaluations(
    student_id: UUID, store: RecordStore = Depends(get_record_store)
) -> list[Evaluation]:
    return await store.get_student_evaluations(student_id)
