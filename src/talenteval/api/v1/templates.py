"""
Evaluation Template API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from talenteval.api.deps import get_record_store, require_active_profile
from talenteval.core.models import EvaluationTemplate
from talenteval.core.schemas import TemplateCreate, TemplateSchema, TemplateUpdate
from talenteval.storage.records import RecordStore

router = APIRouter(dependencies=[Depends(require_active_profile)])


async def _get_or_404(store: RecordStore, template_id: UUID) -> EvaluationTemplate:
    template = await store.get_template(template_id)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template not found with ID: {template_id}",
        )
    return template


@router.post("/", response_model=TemplateSchema, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate, store: RecordStore = Depends(get_record_store)
) -> EvaluationTemplate:
    template_id = await store.add_template(template_data.model_dump())
    return await _get_or_404(store, template_id)


@router.get("/", response_model=list[TemplateSchema])
async def list_templates(store: RecordStore = Depends(get_record_store)) -> list[EvaluationTemplate]:
    return await store.get_all_templates()


@router.get("/{template_id}", response_model=TemplateSchema)
async def get_template(
    template_id: UUID, store: RecordStore = Depends(get_record_store)
) -> EvaluationTemplate:
    return await _get_or_404(store, template_id)


@router.put("/{template_id}", response_model=TemplateSchema)
async def update_template(
    template_id: UUID,
    template_update: TemplateUpdate,
    store: RecordStore = Depends(get_record_store),
) -> EvaluationTemplate:
    """Update a template. The criteria list replaces the stored one."""
    await store.update_template(template_id, template_update.model_dump())
    return await _get_or_404(store, template_id)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: UUID, store: RecordStore = Depends(get_record_store)) -> None:
    await store.delete_template(template_id)
