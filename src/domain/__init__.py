"""Domain models and DTOs."""

from src.domain.task import Task, TaskPayload, TaskPriority


__all__ = [
    "Task",
    "TaskPayload",
    "TaskPriority",
]
