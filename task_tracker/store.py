"""In-memory task storage.

Tasks live only for the lifetime of the process. The store is an explicit
object owned by the application, so tests build a fresh one per case.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from task_tracker.errors import TaskNotFoundError
from task_tracker.models import (
    Task,
    TaskCategory,
    TaskCreate,
    TaskFilters,
    TaskPriority,
    TaskStats,
    TaskUpdate,
)
from task_tracker.validation import validate_task_input

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_task_id() -> str:
    return str(uuid4())


class TaskStore:
    """In-memory task storage keeping tasks in creation order.

    Every public method holds the store lock, so a call never observes
    another call half-way through.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        """Initialize an empty task store."""
        self._tasks: list[Task] = []
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        """Return the number of live tasks."""
        with self._lock:
            return len(self._tasks)

    def list(self, filters: TaskFilters | None = None) -> list[Task]:
        """Return tasks matching ``filters`` in creation order."""
        with self._lock:
            if filters is None:
                return list(self._tasks)
            return [task for task in self._tasks if filters.matches(task)]

    def get(self, task_id: str) -> Task:
        """Get a task by its ID. Raises TaskNotFoundError if absent."""
        with self._lock:
            return self._tasks[self._index_of(task_id)]

    def create(self, data: TaskCreate) -> Task:
        """Validate ``data``, store a new task and return it."""
        fields = data.model_dump(exclude_unset=True)
        validate_task_input(fields)

        with self._lock:
            now = self._clock()
            description = fields.get("description")
            task = Task(
                id=self._new_id(),
                title=fields["title"].strip(),
                description=description.strip() if description is not None else None,
                completed=False,
                category=fields.get("category") or TaskCategory.PERSONAL,
                priority=fields.get("priority") or TaskPriority.MEDIUM,
                created_at=now,
                updated_at=now,
            )
            self._tasks.append(task)
        logger.info("Created task id=%s category=%s priority=%s", task.id, task.category.value, task.priority.value)
        return task

    def update(self, task_id: str, data: TaskUpdate) -> Task:
        """Apply the fields sent in ``data`` to an existing task.

        ``updated_at`` is refreshed on every successful call, even when no
        value actually changes.
        """
        with self._lock:
            index = self._index_of(task_id)
            changes = data.changes()
            validate_task_input(changes, partial=True)

            if "title" in changes:
                changes["title"] = changes["title"].strip()
            if changes.get("description") is not None:
                changes["description"] = changes["description"].strip()
            if "category" in changes:
                changes["category"] = TaskCategory(changes["category"])
            if "priority" in changes:
                changes["priority"] = TaskPriority(changes["priority"])
            changes["updated_at"] = self._clock()

            updated_task = self._tasks[index].model_copy(update=changes)
            self._tasks[index] = updated_task
        logger.info("Updated task id=%s fields=%s", task_id, sorted(set(changes) - {"updated_at"}))
        return updated_task

    def delete(self, task_id: str) -> None:
        """Delete a task. Raises TaskNotFoundError if absent."""
        with self._lock:
            del self._tasks[self._index_of(task_id)]
        logger.info("Deleted task id=%s", task_id)

    def stats(self) -> TaskStats:
        """Compute aggregate counts over the current collection."""
        with self._lock:
            stats = TaskStats(total=len(self._tasks))
            for task in self._tasks:
                if task.completed:
                    stats.completed += 1
                stats.by_category[task.category] += 1
                stats.by_priority[task.priority] += 1
        stats.active = stats.total - stats.completed
        return stats

    def clear(self) -> None:
        """Clear all tasks. Useful for testing."""
        with self._lock:
            self._tasks.clear()
        logger.debug("Task store cleared")

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def _new_id(self) -> str:
        existing = {task.id for task in self._tasks}
        task_id = self._id_factory()
        while task_id in existing:
            logger.warning("Task id collision on %s, generating another", task_id)
            task_id = self._id_factory()
        return task_id
