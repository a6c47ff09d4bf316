"""Pydantic models for the Task Tracker API.

Attributes are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from task_tracker import __version__

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskCategory(str, Enum):
    """Category a task belongs to."""

    WORK = "work"
    PERSONAL = "personal"
    OTHER = "other"


class TaskPriority(str, Enum):
    """Priority level of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ApiModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(ApiModel):
    """Request body for creating a new task.

    Fields are loosely typed on purpose: range and enumeration checks are
    done by the store's validation rules so they report ``VALIDATION_ERROR``.
    """

    title: str | None = Field(default=None, description="The task title (required, 1-200 characters)")
    description: str | None = Field(default=None, description="Optional details, up to 1000 characters")
    category: str | None = Field(default=None, description="work, personal or other")
    priority: str | None = Field(default=None, description="low, medium or high")


class TaskUpdate(ApiModel):
    """Request body for updating an existing task. Only sent fields are applied."""

    title: str | None = Field(default=None, description="New title for the task")
    description: str | None = Field(default=None, description="New description, or null to clear it")
    completed: bool | None = Field(default=None, description="New completion status")
    category: str | None = Field(default=None, description="New category")
    priority: str | None = Field(default=None, description="New priority")

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class Task(ApiModel):
    """A task item in the task tracker."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Unique identifier for the task")
    title: str = Field(..., description="The task title")
    description: str | None = Field(default=None, description="Optional task details")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    category: TaskCategory = Field(default=TaskCategory.PERSONAL, description="Task category")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    created_at: datetime = Field(..., description="When the task was created")
    updated_at: datetime = Field(..., description="When the task was last updated")


class TaskFilters(ApiModel):
    """Optional predicates narrowing a task listing. Present filters are ANDed."""

    completed: bool | None = None
    category: str | None = None
    priority: str | None = None
    search: str | None = None

    @field_validator("completed", mode="before")
    @classmethod
    def parse_completed(cls, value: Any) -> bool | None:
        """Query strings other than ``"true"`` mean not completed."""
        if value is None or isinstance(value, bool):
            return value
        return value == "true"

    def matches(self, task: Task) -> bool:
        """Return True if the task satisfies every filter that is set."""
        if self.completed is not None and task.completed != self.completed:
            return False
        if self.category and task.category.value != self.category:
            return False
        if self.priority and task.priority.value != self.priority:
            return False
        if self.search:
            term = self.search.lower()
            in_title = term in task.title.lower()
            in_description = task.description is not None and term in task.description.lower()
            if not (in_title or in_description):
                return False
        return True


class TaskStats(ApiModel):
    """Aggregate counts over the live task collection."""

    total: int = 0
    completed: int = 0
    active: int = 0
    by_category: dict[TaskCategory, int] = Field(
        default_factory=lambda: {category: 0 for category in TaskCategory}
    )
    by_priority: dict[TaskPriority, int] = Field(
        default_factory=lambda: {priority: 0 for priority in TaskPriority}
    )


class TaskEnvelope(ApiModel):
    task: Task


class TaskListEnvelope(ApiModel):
    tasks: list[Task]


class StatsEnvelope(ApiModel):
    stats: TaskStats


class ErrorDetail(ApiModel):
    """Body of an error response."""

    message: str
    code: str
    details: list[dict[str, str]] | None = None


class ErrorResponse(ApiModel):
    error: ErrorDetail


class HealthResponse(ApiModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = __version__
    tasks: int = 0
