from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


AgentStatus = Literal["idle", "active", "busy"]
TaskPriority = Literal["urgent", "high", "medium", "low"]
TaskStatus = Literal["pending", "in-progress", "completed"]
ExecutionStatus = Literal["pending", "running", "completed", "failed"]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Agents


class AgentCreate(ApiModel):
    role: str = Field(min_length=1)
    goal: str = Field(min_length=1)
    backstory: str = Field(min_length=1)
    model: str = "llama-3.3-70b"
    # 0-100 slider value; divided by 100 before reaching the LLM.
    temperature: int = Field(default=70, ge=0, le=100)
    max_iterations: int = Field(default=5, ge=1)
    tools: list[str] = Field(default_factory=list)


class AgentUpdate(ApiModel):
    role: str | None = None
    goal: str | None = None
    backstory: str | None = None
    model: str | None = None
    temperature: int | None = Field(default=None, ge=0, le=100)
    max_iterations: int | None = Field(default=None, ge=1)
    tools: list[str] | None = None
    status: AgentStatus | None = None
    performance_score: int | None = Field(default=None, ge=0, le=100)
    tasks_completed: int | None = Field(default=None, ge=0)


class Agent(AgentCreate):
    id: str
    status: AgentStatus = "idle"
    performance_score: int = 85
    tasks_completed: int = 0
    created_at: datetime


# Tasks


class TaskCreate(ApiModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    expected_output: str = Field(min_length=1)
    agent_id: str | None = None
    priority: TaskPriority = "medium"
    output_format: str = "text"
    additional_context: str | None = None


class TaskUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    expected_output: str | None = None
    agent_id: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    output_format: str | None = None
    additional_context: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    completed_at: datetime | None = None


class Task(TaskCreate):
    id: str
    status: TaskStatus = "pending"
    progress: int = 0
    created_at: datetime
    completed_at: datetime | None = None


# Templates


class TemplateCreate(ApiModel):
    name: str = Field(min_length=1)
    description: str
    category: str
    agent_count: int = Field(ge=0)
    task_count: int = Field(ge=0)
    featured: bool = False
    author: str
    config: dict[str, Any] = Field(default_factory=dict)


class Template(TemplateCreate):
    id: str
    # Stored x10: 46 means a 4.6 rating.
    rating: int = 46
    downloads: int = 0
    created_at: datetime
    updated_at: datetime


# Executions


class ExecutionCreate(ApiModel):
    description: str = Field(min_length=1)
    model: str
    process_type: str
    max_iterations: int = Field(ge=1)
    verbose_logging: bool = True
    enable_memory: bool = False
    agent_collaboration: bool = True


class ExecutionUpdate(ApiModel):
    description: str | None = None
    status: ExecutionStatus | None = None
    output: str | None = None
    duration: int | None = Field(default=None, ge=0)
    tokens_used: int | None = Field(default=None, ge=0)
    api_calls: int | None = Field(default=None, ge=0)
    cost: int | None = Field(default=None, ge=0)
    completed_at: datetime | None = None


class Execution(ExecutionCreate):
    id: str
    status: ExecutionStatus = "pending"
    output: str | None = None
    duration: int | None = None
    tokens_used: int = 0
    api_calls: int = 0
    cost: int = 0
    created_at: datetime
    completed_at: datetime | None = None


# Files


class FileCreate(ApiModel):
    name: str = Field(min_length=1)
    type: str
    size: int = Field(ge=0)
    execution_id: str | None = None


class File(FileCreate):
    id: str
    downloads: int = 0
    created_at: datetime


class FileDownloadResponse(ApiModel):
    message: str
    file: File


# Completion pass-through


class ExecuteRequest(ApiModel):
    agent_id: str = ""
    task_description: str = ""
    model: str | None = None


class ExecuteResponse(ApiModel):
    result: str
    model: str
    agent: str
    tokens_used: int = 0
