"""
Evaluation API Endpoints

Evaluations are write-once: submit and list by student.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, status

from talenteval.api.deps import get_record_store, require_active_profile
from talenteval.core.models import Evaluation
from talenteval.core.schemas import EvaluationCreate, EvaluationSchema
from talenteval.storage.records import RecordStore

router = APIRouter(dependencies=[Depends(require_active_profile)])


@router.post("/", response_model=EvaluationSchema, status_code=status.HTTP_201_CREATED)
async def submit_evaluation(
    evaluation_data: EvaluationCreate, store: RecordStore = Depends(get_record_store)
) -> Evaluation:
    evaluation_id = await store.add_evaluation(evaluation_data.model_dump())
    evaluations = await store.get_student_evaluations(evaluation_data.student_id)
    return next(e for e in evaluations if e.id == evaluation_id)


@router.get("/", response_model=list[EvaluationSchema])
async def list_evaluations(
    student_id: UUID, store: RecordStore = Depends(get_record_store)
) -> list[Evaluation]:
    return await store.get_student_evaluations(student_id)
