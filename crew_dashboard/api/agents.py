from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from crew_dashboard.models.schemas import Agent, AgentCreate, AgentUpdate
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["agents"])


@router.get("/agents", response_model=list[Agent])
async def list_agents(storage: MemStorage = Depends(get_storage)) -> list[Agent]:
    return storage.get_agents()


@router.get("/agents/{agent_id}", response_model=Agent)
async def get_agent(agent_id: str, storage: MemStorage = Depends(get_storage)) -> Agent:
    agent = storage.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


@router.post("/agents", response_model=Agent, status_code=201)
async def create_agent(payload: AgentCreate, storage: MemStorage = Depends(get_storage)) -> Agent:
    return storage.create_agent(payload)


@router.put("/agents/{agent_id}", response_model=Agent)
async def update_agent(agent_id: str, payload: AgentUpdate, storage: MemStorage = Depends(get_storage)) -> Agent:
    agent = storage.update_agent(agent_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


@router.delete("/agents/{agent_id}", status_code=204)
async def delete_agent(agent_id: str, storage: MemStorage = Depends(get_storage)) -> Response:
    if not storage.delete_agent(agent_id):
        raise HTTPException(status_code=404, detail="Agent not found")
    return Response(status_code=204)
