"""Error types raised by the task store.

Each error carries a machine-readable ``code`` and the HTTP status the API
layer reports it with.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single failed validation rule."""

    field: str
    reason: str
    message: str


class TaskStoreError(Exception):
    """Base class for recoverable task store errors."""

    code = "TASK_STORE_ERROR"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskNotFoundError(TaskStoreError):
    """Raised when no task has the requested id."""

    code = "TASK_NOT_FOUND"
    status_code = 404

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id


class TaskValidationError(TaskStoreError):
    """Raised when task input breaks one or more validation rules."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, violations: list[Violation]) -> None:
        if not violations:
            raise ValueError("TaskValidationError needs at least one violation")
        super().__init__(violations[0].message)
        self.violations = violations
