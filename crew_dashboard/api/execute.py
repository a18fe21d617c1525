from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crew_dashboard.config import get_settings
from crew_dashboard.models.schemas import ExecuteRequest, ExecuteResponse
from crew_dashboard.observability.llm import extract_total_tokens
from crew_dashboard.services.completion import (
    ChatMessage,
    CompletionClient,
    CompletionError,
    extract_text,
    get_completion_client,
)
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["execute"])


# Plain def: the SDK call blocks, so FastAPI runs this in its threadpool.
@router.post("/execute", response_model=ExecuteResponse)
def execute_task(
    payload: ExecuteRequest,
    storage: MemStorage = Depends(get_storage),
    client: CompletionClient = Depends(get_completion_client),
) -> ExecuteResponse:
    agent_id = payload.agent_id.strip()
    task_description = payload.task_description.strip()
    if not agent_id or not task_description:
        raise HTTPException(status_code=400, detail="Agent ID and task description are required")

    agent = storage.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")

    model = payload.model or agent.model or get_settings().default_model
    config = client.get_model_config(model)
    messages: list[ChatMessage] = [
        {
            "role": "system",
            "content": f"You are {agent.role}. Your goal: {agent.goal}. Background: {agent.backstory}",
        },
        {"role": "user", "content": task_description},
    ]

    try:
        completion = client.create_completion(
            model,
            messages,
            temperature=agent.temperature / 100,
            max_tokens=config.max_tokens,
            top_p=config.top_p,
        )
    except CompletionError as exc:
        raise HTTPException(status_code=500, detail="Failed to execute task with Cerebras AI") from exc

    return ExecuteResponse(
        result=extract_text(completion) or "No response generated",
        model=model,
        agent=agent.role,
        tokens_used=extract_total_tokens(completion) or 0,
    )
