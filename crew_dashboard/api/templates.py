from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crew_dashboard.models.schemas import Template, TemplateCreate
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["templates"])


@router.get("/templates", response_model=list[Template])
async def list_templates(storage: MemStorage = Depends(get_storage)) -> list[Template]:
    return storage.get_templates()


@router.get("/templates/{template_id}", response_model=Template)
async def get_template(template_id: str, storage: MemStorage = Depends(get_storage)) -> Template:
    template = storage.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.post("/templates", response_model=Template, status_code=201)
async def create_template(payload: TemplateCreate, storage: MemStorage = Depends(get_storage)) -> Template:
    return storage.create_template(payload)
