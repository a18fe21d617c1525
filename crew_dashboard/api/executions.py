from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crew_dashboard.models.schemas import Execution, ExecutionCreate, ExecutionUpdate
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["executions"])


@router.get("/executions", response_model=list[Execution])
async def list_executions(storage: MemStorage = Depends(get_storage)) -> list[Execution]:
    return storage.get_executions()


@router.get("/executions/{execution_id}", response_model=Execution)
async def get_execution(execution_id: str, storage: MemStorage = Depends(get_storage)) -> Execution:
    execution = storage.get_execution(execution_id)
    if execution is None:
        raise HTTPException(status_code=404, detail="Execution not found")
    return execution


@router.post("/executions", response_model=Execution, status_code=201)
async def create_execution(payload: ExecutionCreate, storage: MemStorage = Depends(get_storage)) -> Execution:
    return storage.create_execution(payload)


@router.put("/executions/{execution_id}", response_model=Execution)
async def update_execution(
    execution_id: str,
    payload: ExecutionUpdate,
    storage: MemStorage = Depends(get_storage),
) -> Execution:
    execution = storage.update_execution(execution_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if execution is None:
        raise HTTPException(status_code=404, detail="Execution not found")
    return execution
