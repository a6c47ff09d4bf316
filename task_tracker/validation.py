"""Validation rules for task input.

Input is a mapping holding only the fields the client sent. Every rule
looks at that mapping and returns a ``Violation`` or ``None``; rules run in
order and all of them run before the store touches any task.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from task_tracker.errors import TaskValidationError, Violation
from task_tracker.models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskCategory, TaskPriority

Rule = Callable[[Mapping[str, Any], bool], "Violation | None"]

VALID_CATEGORIES = frozenset(category.value for category in TaskCategory)
VALID_PRIORITIES = frozenset(priority.value for priority in TaskPriority)


def title_required(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    if partial:
        return None
    if not fields.get("title"):
        return Violation("title", "title_required", "Title is required")
    return None


def title_not_empty(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    if "title" not in fields:
        return None
    title = fields["title"]
    if not partial and not title:
        # reported by title_required
        return None
    if title is None or not title.strip():
        return Violation("title", "title_empty", "Title cannot be empty")
    return None


def title_max_length(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    title = fields.get("title")
    if title and len(title.strip()) > TITLE_MAX_LENGTH:
        return Violation(
            "title",
            "title_too_long",
            f"Title must not exceed {TITLE_MAX_LENGTH} characters",
        )
    return None


def description_max_length(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    # Checked before trimming, unlike the title.
    description = fields.get("description")
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return Violation(
            "description",
            "description_too_long",
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
        )
    return None


def completed_is_bool(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    if "completed" in fields and not isinstance(fields["completed"], bool):
        return Violation("completed", "completed_invalid", "Completed must be true or false")
    return None


def category_is_valid(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    if "category" in fields and fields["category"] not in VALID_CATEGORIES:
        return Violation("category", "category_invalid", "Category must be work, personal, or other")
    return None


def priority_is_valid(fields: Mapping[str, Any], partial: bool) -> Violation | None:
    if "priority" in fields and fields["priority"] not in VALID_PRIORITIES:
        return Violation("priority", "priority_invalid", "Priority must be low, medium, or high")
    return None


RULES: tuple[Rule, ...] = (
    title_required,
    title_not_empty,
    title_max_length,
    description_max_length,
    completed_is_bool,
    category_is_valid,
    priority_is_valid,
)


def collect_violations(fields: Mapping[str, Any], *, partial: bool = False) -> list[Violation]:
    """Run every rule against ``fields`` and return the failures in rule order."""
    violations = []
    for rule in RULES:
        violation = rule(fields, partial)
        if violation is not None:
            violations.append(violation)
    return violations


def validate_task_input(fields: Mapping[str, Any], *, partial: bool = False) -> None:
    """Raise TaskValidationError if ``fields`` breaks any rule.

    ``partial`` marks an update: the title becomes optional and only the
    fields present in the mapping are checked.
    """
    violations = collect_violations(fields, partial=partial)
    if violations:
        raise TaskValidationError(violations)
