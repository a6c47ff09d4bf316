"""Task endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Request, status

from task_tracker.models import (
    ErrorResponse,
    StatsEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskFilters,
    TaskListEnvelope,
    TaskUpdate,
)
from task_tracker.store import TaskStore

router = APIRouter(prefix="/api", tags=["Tasks"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def get_store(request: Request) -> TaskStore:
    """Return the store owned by the running application."""
    return request.app.state.store


StoreDep = Annotated[TaskStore, Depends(get_store)]


@router.get("/tasks", response_model=TaskListEnvelope, response_model_exclude_none=True)
async def list_tasks(store: StoreDep, filters: Annotated[TaskFilters, Query()]) -> TaskListEnvelope:
    """List tasks, optionally filtered by status, category, priority and search text."""
    return TaskListEnvelope(tasks=store.list(filters))


@router.post(
    "/tasks",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID,
)
async def create_task(store: StoreDep, data: Annotated[TaskCreate, Body()] = TaskCreate()) -> TaskEnvelope:
    """Create a new task."""
    return TaskEnvelope(task=store.create(data))


@router.get(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    responses=NOT_FOUND,
)
async def get_task(task_id: str, store: StoreDep) -> TaskEnvelope:
    """Get a specific task by ID."""
    return TaskEnvelope(task=store.get(task_id))


@router.put(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    responses={**NOT_FOUND, **INVALID},
)
@router.patch(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    responses={**NOT_FOUND, **INVALID},
)
async def update_task(
    task_id: str,
    store: StoreDep,
    data: Annotated[TaskUpdate, Body()] = TaskUpdate(),
) -> TaskEnvelope:
    """Update only the fields sent in the body."""
    return TaskEnvelope(task=store.update(task_id, data))


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_task(task_id: str, store: StoreDep) -> None:
    """Delete a task."""
    store.delete(task_id)


@router.get("/stats", response_model=StatsEnvelope)
async def get_stats(store: StoreDep) -> StatsEnvelope:
    """Aggregate counts over all tasks."""
    return StatsEnvelope(stats=store.stats())
