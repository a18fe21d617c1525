from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel

from crew_dashboard.config import get_settings
from crew_dashboard.models.schemas import (
    Agent,
    AgentCreate,
    Execution,
    ExecutionCreate,
    File,
    FileCreate,
    Task,
    TaskCreate,
    Template,
    TemplateCreate,
)
from crew_dashboard.services.seed import seed_sample_data


ModelT = TypeVar("ModelT", bound=BaseModel)

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _apply_updates(current: ModelT, updates: dict[str, Any]) -> ModelT:
    # Re-validate so an update cannot leave an entity in an invalid shape; "id" is immutable.
    merged = {**current.model_dump(), **{k: v for k, v in updates.items() if k != "id"}}
    return type(current).model_validate(merged)


class MemStorage:
    """Volatile keyed collections for the dashboard. Last write wins."""

    def __init__(self) -> None:
        self.agents: dict[str, Agent] = {}
        self.tasks: dict[str, Task] = {}
        self.templates: dict[str, Template] = {}
        self.executions: dict[str, Execution] = {}
        self.files: dict[str, File] = {}

    # Agents

    def get_agents(self) -> list[Agent]:
        return list(self.agents.values())

    def get_agent(self, agent_id: str) -> Agent | None:
        return self.agents.get(agent_id)

    def create_agent(self, data: AgentCreate) -> Agent:
        agent = Agent(
            **data.model_dump(),
            id=_new_id(),
            status="idle",
            performance_score=random.randint(80, 99),
            tasks_completed=0,
            created_at=_now(),
        )
        self.agents[agent.id] = agent
        logger.info("agent_created", agent_id=agent.id, role=agent.role)
        return agent

    def update_agent(self, agent_id: str, updates: dict[str, Any]) -> Agent | None:
        agent = self.agents.get(agent_id)
        if agent is None:
            return None
        updated = _apply_updates(agent, updates)
        self.agents[agent_id] = updated
        return updated

    def delete_agent(self, agent_id: str) -> bool:
        return self.agents.pop(agent_id, None) is not None

    # Tasks

    def get_tasks(self) -> list[Task]:
        return list(self.tasks.values())

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def create_task(self, data: TaskCreate) -> Task:
        task = Task(
            **data.model_dump(),
            id=_new_id(),
            status="pending",
            progress=0,
            created_at=_now(),
            completed_at=None,
        )
        self.tasks[task.id] = task
        logger.info("task_created", task_id=task.id, agent_id=task.agent_id)
        return task

    def update_task(self, task_id: str, updates: dict[str, Any]) -> Task | None:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        updated = _apply_updates(task, updates)
        self.tasks[task_id] = updated
        return updated

    def delete_task(self, task_id: str) -> bool:
        return self.tasks.pop(task_id, None) is not None

    # Templates

    def get_templates(self) -> list[Template]:
        return list(self.templates.values())

    def get_template(self, template_id: str) -> Template | None:
        return self.templates.get(template_id)

    def create_template(self, data: TemplateCreate) -> Template:
        now = _now()
        template = Template(
            **data.model_dump(),
            id=_new_id(),
            rating=46,
            downloads=0,
            created_at=now,
            updated_at=now,
        )
        self.templates[template.id] = template
        logger.info("template_created", template_id=template.id, category=template.category)
        return template

    # Executions

    def get_executions(self) -> list[Execution]:
        return list(self.executions.values())

    def get_execution(self, execution_id: str) -> Execution | None:
        return self.executions.get(execution_id)

    def create_execution(self, data: ExecutionCreate) -> Execution:
        execution = Execution(**data.model_dump(), id=_new_id(), created_at=_now())
        self.executions[execution.id] = execution
        logger.info("execution_created", execution_id=execution.id, model=execution.model)
        return execution

    def update_execution(self, execution_id: str, updates: dict[str, Any]) -> Execution | None:
        execution = self.executions.get(execution_id)
        if execution is None:
            return None
        updated = _apply_updates(execution, updates)
        self.executions[execution_id] = updated
        return updated

    # Files

    def get_files(self) -> list[File]:
        return list(self.files.values())

    def get_file(self, file_id: str) -> File | None:
        return self.files.get(file_id)

    def create_file(self, data: FileCreate) -> File:
        file = File(**data.model_dump(), id=_new_id(), downloads=0, created_at=_now())
        self.files[file.id] = file
        logger.info("file_created", file_id=file.id, name=file.name)
        return file

    def update_file(self, file_id: str, updates: dict[str, Any]) -> File | None:
        file = self.files.get(file_id)
        if file is None:
            return None
        updated = _apply_updates(file, updates)
        self.files[file_id] = updated
        return updated

    def delete_file(self, file_id: str) -> bool:
        return self.files.pop(file_id, None) is not None


_storage: MemStorage | None = None


def get_storage() -> MemStorage:
    global _storage
    if _storage is None:
        _storage = MemStorage()
        if get_settings().seed_sample_data:
            seed_sample_data(_storage)
    return _storage


def set_storage(storage: MemStorage | None) -> None:
    global _storage
    _storage = storage
