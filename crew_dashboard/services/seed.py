"""Sample records loaded into a fresh store so the dashboard is not empty."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from crew_dashboard.models.schemas import Agent, File, Task, Template

if TYPE_CHECKING:
    from crew_dashboard.services.storage import MemStorage


SAMPLE_AGENTS = [
    {
        "id": "1",
        "role": "Senior Research Analyst",
        "goal": "Conduct comprehensive market research and competitive analysis",
        "backstory": "Expert analyst with 10+ years in market research and data analysis",
        "model": "llama-3.3-70b",
        "temperature": 70,
        "max_iterations": 5,
        "tools": ["web_search", "file_reader", "calculator"],
        "status": "active",
        "performance_score": 94,
        "tasks_completed": 23,
    },
    {
        "id": "2",
        "role": "Content Creator",
        "goal": "Create engaging marketing content and copy",
        "backstory": "Creative professional specializing in digital marketing content",
        "model": "llama-4-scout-17b-16e-instruct",
        "temperature": 60,
        "max_iterations": 3,
        "tools": ["web_search", "file_reader"],
        "status": "busy",
        "performance_score": 87,
        "tasks_completed": 18,
    },
    {
        "id": "3",
        "role": "Code Reviewer",
        "goal": "Review code for best practices and security",
        "backstory": "Senior developer with expertise in security and code quality",
        "model": "llama-4-maverick-17b-128e-instruct",
        "temperature": 20,
        "max_iterations": 10,
        "tools": ["code_interpreter", "file_reader"],
        "status": "idle",
        "performance_score": 91,
        "tasks_completed": 31,
    },
    {
        "id": "4",
        "role": "Data Scientist",
        "goal": "Analyze complex datasets and create predictive models",
        "backstory": "PhD in Statistics with focus on machine learning and analytics",
        "model": "llama-3.3-70b",
        "temperature": 40,
        "max_iterations": 8,
        "tools": ["calculator", "code_interpreter", "file_reader"],
        "status": "active",
        "performance_score": 96,
        "tasks_completed": 15,
    },
]

# age_hours / completed_hours_ago are relative to load time.
SAMPLE_TASKS = [
    {
        "id": "1",
        "name": "Competitive Analysis Report",
        "description": "Analyze top 5 competitors in the market",
        "expected_output": "Comprehensive PDF report with findings",
        "agent_id": "1",
        "priority": "urgent",
        "status": "in-progress",
        "output_format": "PDF",
        "progress": 73,
        "additional_context": "Focus on market positioning and pricing strategies",
        "age_hours": 2,
    },
    {
        "id": "2",
        "name": "Social Media Content Strategy",
        "description": "Create Q2 social media content strategy",
        "expected_output": "Strategic content plan with recommendations",
        "agent_id": "2",
        "priority": "high",
        "status": "completed",
        "output_format": "Markdown",
        "progress": 100,
        "additional_context": None,
        "age_hours": 24,
        "completed_hours_ago": 12,
    },
    {
        "id": "3",
        "name": "Code Security Audit",
        "description": "Review codebase for security vulnerabilities",
        "expected_output": "Security audit report with recommendations",
        "agent_id": "3",
        "priority": "medium",
        "status": "pending",
        "output_format": "JSON",
        "progress": 0,
        "additional_context": "Include OWASP top 10 vulnerabilities",
        "age_hours": 72,
    },
    {
        "id": "4",
        "name": "Customer Behavior Analysis",
        "description": "Analyze customer transaction data",
        "expected_output": "Data insights and predictions",
        "agent_id": "4",
        "priority": "high",
        "status": "in-progress",
        "output_format": "CSV",
        "progress": 45,
        "additional_context": "Focus on purchasing patterns and retention",
        "age_hours": 24,
    },
]

SAMPLE_TEMPLATES = [
    {
        "id": "1",
        "name": "Research & Analysis Team",
        "description": "Comprehensive research crew with market analyst, data researcher, and report writer",
        "category": "Research",
        "agent_count": 3,
        "task_count": 5,
        "rating": 48,
        "downloads": 1247,
        "featured": True,
        "author": "CrewAI Team",
    },
    {
        "id": "2",
        "name": "Content Creation Squad",
        "description": "Marketing-focused crew with content strategist and copywriter",
        "category": "Marketing",
        "agent_count": 2,
        "task_count": 4,
        "rating": 46,
        "downloads": 892,
        "featured": False,
        "author": "Marketing Pro",
    },
    {
        "id": "3",
        "name": "Code Review Team",
        "description": "Development crew with senior reviewer, security auditor, and QA specialist",
        "category": "Development",
        "agent_count": 3,
        "task_count": 6,
        "rating": 49,
        "downloads": 1456,
        "featured": False,
        "author": "DevOps Expert",
    },
    {
        "id": "4",
        "name": "Data Science Pipeline",
        "description": "Complete data science workflow with data engineer, analyst, ML engineer, and visualization specialist",
        "category": "Data Science",
        "agent_count": 4,
        "task_count": 8,
        "rating": 47,
        "downloads": 2103,
        "featured": True,
        "author": "Data Team",
    },
]

SAMPLE_FILES = [
    {"id": "1", "name": "Market Analysis Q4 2024", "type": "Report", "size": 2_400_000, "downloads": 247, "age_hours": 1},
    {"id": "2", "name": "Content Strategy 2024", "type": "Strategy", "size": 1_800_000, "downloads": 156, "age_hours": 2},
    {"id": "3", "name": "Customer Data Analysis", "type": "Data", "size": 3_200_000, "downloads": 89, "age_hours": 3},
    {"id": "4", "name": "Security Audit Report", "type": "Code", "size": 956_000, "downloads": 72, "age_hours": 4},
]


def seed_sample_data(storage: MemStorage) -> None:
    now = datetime.now(timezone.utc)

    for row in SAMPLE_AGENTS:
        storage.agents[row["id"]] = Agent(**row, created_at=now)

    for row in SAMPLE_TASKS:
        fields = dict(row)
        age = timedelta(hours=fields.pop("age_hours"))
        completed_hours_ago = fields.pop("completed_hours_ago", None)
        completed_at = now - timedelta(hours=completed_hours_ago) if completed_hours_ago is not None else None
        storage.tasks[fields["id"]] = Task(**fields, created_at=now - age, completed_at=completed_at)

    for row in SAMPLE_TEMPLATES:
        storage.templates[row["id"]] = Template(**row, config={}, created_at=now, updated_at=now)

    for row in SAMPLE_FILES:
        fields = dict(row)
        age = timedelta(hours=fields.pop("age_hours"))
        storage.files[fields["id"]] = File(**fields, execution_id=None, created_at=now - age)
