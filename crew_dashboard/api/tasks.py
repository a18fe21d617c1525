from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from crew_dashboard.models.schemas import Task, TaskCreate, TaskUpdate
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["tasks"])


@router.get("/tasks", response_model=list[Task])
async def list_tasks(storage: MemStorage = Depends(get_storage)) -> list[Task]:
    return storage.get_tasks()


@router.get("/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, storage: MemStorage = Depends(get_storage)) -> Task:
    task = storage.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/tasks", response_model=Task, status_code=201)
async def create_task(payload: TaskCreate, storage: MemStorage = Depends(get_storage)) -> Task:
    return storage.create_task(payload)


@router.put("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, payload: TaskUpdate, storage: MemStorage = Depends(get_storage)) -> Task:
    task = storage.update_task(task_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, storage: MemStorage = Depends(get_storage)) -> Response:
    if not storage.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)
